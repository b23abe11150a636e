from typing import Any, Dict, Optional

from pymongo.collection import Collection

from backend.models.base_nosql_model import BaseNoSqlModel
from shared.modules.user.models.user import User


class UserModel(BaseNoSqlModel):
    id_field = "user_id"

    @property
    def collection(self) -> Collection:
        return self.db.users

    @classmethod
    def _from_doc(cls, doc: Dict[str, Any]) -> User:
        return User(**cls.to_public(doc))

    @classmethod
    def find_by_email(cls, email: str) -> Optional[User]:
        doc = cls.find_one_by(email=email.strip().lower())
        return cls._from_doc(doc) if doc else None
