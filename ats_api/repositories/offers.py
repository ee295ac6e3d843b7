from sqlalchemy.orm import joinedload, selectinload

from ats_api.models.candidate import Process
from ats_api.models.offer import Offer
from ats_api.models.user import User
from ats_api.repositories.base import SqlRepository


class OfferRepository(SqlRepository[Offer]):
    model = Offer
    filter_columns = {
        "job": Offer.job,
        "annualSalary": Offer.annual_salary,
        "contractType": Offer.contract_type,
        "referrer": User.slug,
    }
    filter_joins = {"referrer": Offer.referrer}
    sort_columns = {
        "job": Offer.job,
        "annualSalary": Offer.annual_salary,
        "contractType": Offer.contract_type,
    }

    def list_options(self) -> tuple:
        return (joinedload(Offer.owner), joinedload(Offer.referrer))

    def detail_options(self) -> tuple:
        return (
            *self.list_options(),
            selectinload(Offer.processes).joinedload(Process.candidate),
        )
