from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..errors import InvalidArgument, UserDbError
from ..logs import LogContext
from ..services.user_svc import create_user, list_users, update_user

router = APIRouter()


class UserCreate(BaseModel):
    name: str
    age: int


class UserUpdate(BaseModel):
    id: int
    name: str
    age: int


@router.get("/api/users")
def api_users_list():
    try:
        return {"items": list_users()}
    except UserDbError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/api/users/create", status_code=201)
def api_users_create(body: UserCreate):
    log = LogContext("CREATE_USER")
    log.set_payload(body.model_dump())
    try:
        create_user(body.name, body.age, log)
        log.write("OK")
        return {"message": "ok"}
    except InvalidArgument as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except UserDbError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/api/users/update")
def api_users_update(body: UserUpdate):
    log = LogContext("UPDATE_USER")
    log.set_payload(body.model_dump())
    try:
        update_user(body.id, body.name, body.age, log)
        log.write("OK")
        return {"message": "ok"}
    except InvalidArgument as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except UserDbError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))
