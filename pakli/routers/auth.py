# File: pakli/routers/auth.py

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from pakli.db.session import get_db
from pakli.models.user import User, UserProfile
from pakli.schemas.auth import RegisterIn, LoginIn, TokenPair
from pakli.schemas.user import ProfileUpdate, UserOut
from pakli.core.security import hash_password, verify_password, make_tokens, get_current_user
from pakli.core.ratelimit import limiter
from pakli.services.profiles import to_user_out

router = APIRouter(prefix="/auth", tags=["auth"])

EMAIL_TAKEN = "Този имейл вече е зает."
BAD_CREDENTIALS = "Грешен имейл или парола"

def _is_duplicate(err: IntegrityError) -> bool:
    msg = str(err.orig).lower()
    # postgres says "duplicate key value", sqlite says "unique constraint failed"
    return "duplicate key value" in msg or "unique constraint" in msg

@router.post("/register", response_model=TokenPair)
@limiter.limit("10/minute")
def register(request: Request, body: RegisterIn, db: Session = Depends(get_db)):
    email = body.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=400, detail=EMAIL_TAKEN)

    user = User(
        email=email,
        name=body.name.strip(),
        hashed_password=hash_password(body.password),
    )
    user.profile = UserProfile(
        address=body.address,
        city=body.city,
        district=body.district,
        notifications=body.notifications,
        email_notifications=body.email_notifications,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if _is_duplicate(e):
            raise HTTPException(status_code=400, detail=EMAIL_TAKEN)
        logging.error(f"Failed to register user: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Регистрацията не беше успешна")
    db.refresh(user)
    logging.info("Registered user %s", user.id)
    return make_tokens(user.id)

@router.post("/login", response_model=TokenPair)
@limiter.limit("10/minute")
def login(request: Request, body: LoginIn, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == body.email.lower()).first()
    if not user or not user.hashed_password:
        raise HTTPException(status_code=401, detail=BAD_CREDENTIALS)
    if not verify_password(body.password, user.hashed_password):
        raise HTTPException(status_code=401, detail=BAD_CREDENTIALS)
    user.last_login = datetime.now(timezone.utc)
    db.commit()
    return make_tokens(user.id)

@router.post("/logout")
def logout(current=Depends(get_current_user)):
    # tokens are stateless; the client drops them
    return {"success": True, "message": "Successfully logged out"}

@router.get("/me", response_model=UserOut)
def me(current=Depends(get_current_user)):
    return to_user_out(current)

@router.put("/profile", response_model=UserOut)
def update_profile(
    body: ProfileUpdate,
    user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise HTTPException(status_code=400, detail="Няма полета за обновяване")

    if "name" in changes:
        user.name = changes.pop("name").strip()
    if changes:
        if user.profile is None:
            user.profile = UserProfile()
        for key, value in changes.items():
            setattr(user.profile, key, value)
    db.commit()
    db.refresh(user)
    return to_user_out(user)
