from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ....application.use_cases.register_user import RegisterUser
from ....domain.entities import User
from ....infrastructure.db import get_db
from ....infrastructure.repositories import UserRepository
from ....infrastructure.security import PasswordHasher
from ..authn import get_current_user
from ..schemas import UserCreate, UserOut

router = APIRouter(prefix="/api/users", tags=["users"])

@router.get("", response_model=UserOut)
def current_user(user: User = Depends(get_current_user)):
    return UserOut.model_validate(user)

@router.post("", status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    uc = RegisterUser(repo=UserRepository(db), hasher=PasswordHasher())
    uc.execute(payload.model_dump(by_alias=True))
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": "/"})
