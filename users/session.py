"""
Session context: the authenticated identity resolved once per request.

Views that need the current user declare `@session_required` and receive a
`session` keyword argument instead of reading `request.user` ad hoc.
"""

import functools
from dataclasses import dataclass

from django.contrib.auth.views import redirect_to_login


@dataclass(frozen=True)
class SessionContext:
    user_id: int
    email: str


def resolve_session(request):
    """Returns a SessionContext for the logged-in user, or None."""
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return None
    return SessionContext(user_id=user.pk, email=user.email)


def session_required(view_func):
    """
    Resolves the session at the view boundary.
    Anonymous users are sent to the login page with a `next` back here.
    """
    @functools.wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        session = resolve_session(request)
        if session is None:
            return redirect_to_login(request.get_full_path())
        return view_func(request, *args, session=session, **kwargs)

    return _wrapped
