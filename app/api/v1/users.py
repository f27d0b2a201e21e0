"""
User API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import CamelModel, get_store, path_id
from app.application.errors import ConflictError
from app.application.users import CreateUserUseCase, UserValidationError
from app.infrastructure.store.entry_store import EntryStore
from app.infrastructure.store.repository import UserRepository


router = APIRouter(prefix="/api/v1/users", tags=["users"])


class CreateUserRequest(CamelModel):
    username: str
    password: str


class UserResponse(CamelModel):
    """Пароль (хэш) наружу не отдаётся"""
    id: int
    username: str


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(req: CreateUserRequest, store: EntryStore = Depends(get_store)):
    try:
        with store.session() as db:
            user = CreateUserUseCase(db).execute(username=req.username, password=req.password)
    except UserValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, store: EntryStore = Depends(get_store)):
    uid = path_id(user_id, "user")
    with store.session() as db:
        user = UserRepository(db).get(uid)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return UserResponse.model_validate(user)
