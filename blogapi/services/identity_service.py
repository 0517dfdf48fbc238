"""Resolution of the acting user for a request.

Two sources are supported, tried in order:

* ``SessionResolver`` -- the JWT access token issued by ``/api/auth/login``.
* ``TrustedHeaderResolver`` -- an ``X-Acting-User-Id`` header sent by an
  internal service.  It is only honored when the request also carries an
  ``X-Internal-Token`` matching ``INTERNAL_API_TOKEN``; with no token
  configured the header is ignored, so external clients can never act as
  another user by naming them.

Services never see where the id came from: routes resolve it here and pass
a plain user id down.
"""
import hmac
import logging

from flask import current_app, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from blogapi.repositories import user_repository


logger = logging.getLogger(__name__)

ACTING_USER_HEADER = "X-Acting-User-Id"
INTERNAL_TOKEN_HEADER = "X-Internal-Token"


class IdentityResolver:
    def resolve(self):
        raise NotImplementedError


class SessionResolver(IdentityResolver):
    def resolve(self):
        # a bad or expired token reads as anonymous, like a missing one
        try:
            verify_jwt_in_request(optional=True)
        except (JWTExtendedException, PyJWTError) as e:
            logger.info("Ignoring unusable access token: %s", e)
            return None
        return get_jwt_identity()


class TrustedHeaderResolver(IdentityResolver):
    def resolve(self):
        acting_user_id = (request.headers.get(ACTING_USER_HEADER) or "").strip()
        if not acting_user_id:
            return None

        expected = current_app.config.get("INTERNAL_API_TOKEN") or ""
        supplied = request.headers.get(INTERNAL_TOKEN_HEADER) or ""
        if not expected or not hmac.compare_digest(
            supplied.encode("utf-8"), expected.encode("utf-8")
        ):
            logger.warning(
                "Ignoring %s from untrusted caller %s",
                ACTING_USER_HEADER,
                request.remote_addr,
            )
            return None

        return acting_user_id


DEFAULT_RESOLVERS = (SessionResolver(), TrustedHeaderResolver())


def resolve_user_id(resolvers=DEFAULT_RESOLVERS):
    """Return the id of an existing user acting on this request, or None."""
    for resolver in resolvers:
        user_id = resolver.resolve()
        if not user_id:
            continue

        if user_repository.get_by_id(user_id) is None:
            logger.info("Resolved identity %s has no user record", user_id)
            return None
        return user_id

    return None
