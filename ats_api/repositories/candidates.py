from sqlalchemy.orm import joinedload, selectinload

from ats_api.models.candidate import Candidate, Process
from ats_api.models.user import User
from ats_api.repositories.base import SqlRepository


class CandidateRepository(SqlRepository[Candidate]):
    model = Candidate
    filter_columns = {
        "name": Candidate.name,
        "email": Candidate.email,
        "referrer": User.slug,
    }
    filter_joins = {"referrer": Candidate.referrer}
    sort_columns = {"name": Candidate.name, "email": Candidate.email}

    def list_options(self) -> tuple:
        return (joinedload(Candidate.referrer),)

    def detail_options(self) -> tuple:
        return (
            *self.list_options(),
            joinedload(Candidate.qualification),
            selectinload(Candidate.processes).joinedload(Process.offer),
            selectinload(Candidate.interviews),
        )
