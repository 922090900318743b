# rentdrive/auth.py
import logging
from functools import wraps

from flask import session
from flask_login import UserMixin, current_user, login_user, logout_user
from werkzeug.security import check_password_hash, generate_password_hash

from . import login_manager
from . import repositories as repo
from .utils import alert_redirect

ROLES = ('user', 'driver', 'organization')

security_logger = logging.getLogger('rentdrive.security')


class Identity(UserMixin):
    """Authenticated caller: an account row plus the table it came from."""

    def __init__(self, id, role, name):
        self.id = int(id)
        self.role = role
        self.name = name

    def get_id(self):
        return f"{self.role}:{self.id}"

    def __repr__(self):
        return f"<Identity {self.role}:{self.id} {self.name!r}>"


def hash_password(password):
    return generate_password_hash(password)


# ---- session lifecycle ----
def login(identity):
    session.permanent = True
    login_user(identity)
    return identity.get_id()


def current():
    if current_user.is_authenticated:
        return current_user._get_current_object()
    return None


def destroy():
    logout_user()
    session.clear()


def _account_name(role, account_id):
    if role == 'user':
        row = repo.get_user(account_id)
        return row.fullname if row else None
    if role == 'driver':
        row = repo.get_driver(account_id)
        return row.fullname if row else None
    if role == 'organization':
        row = repo.get_organization(account_id)
        return row.company_name if row else None
    return None


@login_manager.user_loader
def load_identity(key):
    role, _, raw_id = key.partition(':')
    if role not in ROLES or not raw_id.isdigit():
        return None
    name = _account_name(role, int(raw_id))
    if name is None:
        return None
    return Identity(int(raw_id), role, name)


def authenticate(email, password):
    """Probe users, drivers, then organizations; first verified match wins."""
    probes = (
        ('user', repo.find_user_by_email, 'fullname'),
        ('driver', repo.find_driver_by_email, 'fullname'),
        ('organization', repo.find_organization_by_email, 'company_name'),
    )
    for role, finder, name_field in probes:
        row = finder(email)
        if row and check_password_hash(row.password_hash, password):
            return Identity(row.id, role, getattr(row, name_field))

    security_logger.warning("Failed login for %s", email)
    return None


def roles_required(*roles):
    """Allow the wrapped view only for callers whose role is in ``roles``.

    Must sit below ``login_required``; a caller with another role gets an
    inline alert and is sent back to the dashboard.
    """
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            if current_user.role not in roles:
                security_logger.warning("Role %s denied for %s", current_user.role, view.__name__)
                return alert_redirect('You are not allowed to do that.', '/dashboard')
            return view(*args, **kwargs)
        return wrapped
    return decorator
