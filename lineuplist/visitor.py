import secrets

from flask import g, session

SESSION_UID_KEY = "session_uid"


def attach_session_uid():
    """Give every visitor a stable random id, kept in Flask's signed cookie.

    The id keys the visitor's `sessionData:<uid>` hash in Redis.
    """
    uid = session.get(SESSION_UID_KEY)
    if not uid:
        uid = secrets.token_hex(16)
        session[SESSION_UID_KEY] = uid
        session.permanent = True
    g.session_uid = uid
