import logging
import uuid
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.errors import DuplicateEmail, InvalidCredentials, NotFound
from app.core.security import create_access_token, hash_password, pwd_context, verify_password
from app.modules.users.models import User
from app.modules.users.repository import UserRepository
from app.modules.users.schemas import UserRegister

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = UserRepository(session)

    async def register(self, payload: UserRegister) -> tuple[User, str]:
        data = payload.model_dump(exclude={"password"})
        data["password_hash"] = hash_password(payload.password)
        try:
            user = await self.repo.create(**data)
            await self.session.commit()
        except IntegrityError:
            # unique(email) is the source of truth, no read-before-write
            await self.session.rollback()
            raise DuplicateEmail()
        logger.info(f"Registered user {user.id} with role {user.role.value}")
        return user, create_access_token(user.id, user.role)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        user = await self.repo.get_by_email(email)
        if user is None:
            pwd_context.dummy_verify()
            logger.warning("Failed login attempt")
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise InvalidCredentials()
        logger.info(f"User {user.id} logged in")
        return user, create_access_token(user.id, user.role)

    async def get(self, user_id: uuid.UUID) -> User:
        user = await self.repo.get(user_id)
        if user is None:
            raise NotFound("User not found")
        return user
