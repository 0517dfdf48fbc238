import uuid

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()


def new_id() -> str:
    return uuid.uuid4().hex
