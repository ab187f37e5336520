# File: pakli/routers/users.py
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from pakli.db.session import get_db
from pakli.core.security import get_current_user
from pakli.models.user import User

router = APIRouter(prefix="/users", tags=["users"])

@router.delete("/{user_id}")
def delete_user(user_id: str, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    if current.id != user_id:
        raise HTTPException(403, "Нямате право да изтриете този потребител")
    u = db.get(User, user_id)
    if not u: return {"ok": True}
    db.delete(u); db.commit()
    logging.info(f"User with id {user_id} deleted")
    return {"ok": True}
