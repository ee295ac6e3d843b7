from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import selectinload

from ats_api.models.user import User
from ats_api.repositories.base import SqlRepository


class UserRepository(SqlRepository[User]):
    model = User
    filter_columns = {
        "firstName": User.first_name,
        "lastName": User.last_name,
        "email": User.email,
    }
    sort_columns = filter_columns

    def detail_options(self) -> tuple:
        return (selectinload(User.offers), selectinload(User.clients))

    def get(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def slugs_exist(self, slugs: Sequence[str]) -> bool:
        """True when every slug belongs to a user."""
        unique = set(slugs)
        found = self.db.query(func.count(User.id)).filter(User.slug.in_(unique)).scalar()
        return found == len(unique)
