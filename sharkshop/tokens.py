"""
Session token issuance and verification.

Tokens are signed JWTs produced by Flask-JWT-Extended with the process-wide
``JWT_SECRET_KEY``. Nothing is persisted: a token is trusted only if it
verifies against the secret and has not expired.
"""
from datetime import timedelta
from typing import Dict, Optional

import jwt
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException


class TokenError(Exception):
    reason = "invalid"


class InvalidSignature(TokenError):
    reason = "invalid_signature"


class Expired(TokenError):
    reason = "expired"


class Malformed(TokenError):
    reason = "malformed"


def issue_token(
    subject_id,
    email: str,
    is_admin: bool,
    expires_delta: Optional[timedelta] = None,
) -> str:
    claims = {"email": email, "isAdmin": bool(is_admin)}
    # expires_delta=None falls back to JWT_ACCESS_TOKEN_EXPIRES (7 days)
    return create_access_token(
        identity=str(subject_id),
        additional_claims=claims,
        expires_delta=expires_delta,
    )


def verify_token(token: Optional[str]) -> Dict:
    if not token or not isinstance(token, str):
        raise Malformed("No token supplied.")
    try:
        return decode_token(token)
    except jwt.ExpiredSignatureError as exc:
        raise Expired(str(exc)) from exc
    except jwt.InvalidSignatureError as exc:
        raise InvalidSignature(str(exc)) from exc
    except (jwt.InvalidTokenError, JWTExtendedException) as exc:
        raise Malformed(str(exc)) from exc


def claims_to_identity(claims: Dict) -> Dict:
    return {
        "id": claims.get("sub"),
        "email": claims.get("email"),
        "isAdmin": bool(claims.get("isAdmin")),
        "iat": claims.get("iat"),
        "exp": claims.get("exp"),
    }
