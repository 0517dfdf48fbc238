from blogapi.db import db
from blogapi.models.user_model import User


def get_by_id(user_id: str):
    return db.session.get(User, user_id)


def get_by_email(email: str):
    return User.query.filter_by(email=email).first()


def get_by_ids(user_ids):
    if not user_ids:
        return {}
    users = User.query.filter(User.id.in_(user_ids)).all()
    return {user.id: user for user in users}


def create_user(name, email, password_hash, image=None):
    user = User(
        name=name,
        email=email,
        password_hash=password_hash,
        image=image,
    )
    db.session.add(user)
    db.session.commit()
    return user


def update_user(user, name, email, image=None):
    user.name = name
    user.email = email
    user.image = image
    db.session.commit()
    return user
