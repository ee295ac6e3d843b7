from sqlalchemy.orm import joinedload, selectinload

from ats_api.models.client import Client
from ats_api.models.user import User
from ats_api.repositories.base import SqlRepository


class ClientRepository(SqlRepository[Client]):
    model = Client
    filter_columns = {
        "name": Client.name,
        "accountManager": User.slug,
    }
    filter_joins = {"accountManager": Client.account_manager}
    sort_columns = {"name": Client.name}

    def list_options(self) -> tuple:
        return (joinedload(Client.account_manager), selectinload(Client.offers))
