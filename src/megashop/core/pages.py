"""Server-driven page rendering.

Every page is a component name plus a dict of props. Requests sent by the
client-side router carry an ``X-Inertia`` header and get the page object
back as JSON; full page loads get the HTML shell with the same page object
embedded through ``json_script``.

Shared props available on every page:
- ``auth.user``: the signed-in user or None
- ``flash``: pending messages keyed by level (success, error, warning, info)
- ``errors``: field errors left by the previous redirect-back
- ``old``: the input that failed validation
"""

import json
import logging

from django.contrib import messages
from django.core.paginator import Paginator
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View

logger = logging.getLogger(__name__)

ERRORS_SESSION_KEY = "errors"
OLD_INPUT_SESSION_KEY = "old_input"
PAGE_TEMPLATE = "megashop/app.html"


def user_props(user):
    """Serialize the signed-in user for the shared ``auth`` prop."""
    if not user.is_authenticated:
        return None
    return {
        "id": str(user.pk),
        "name": user.get_display_name(),
        "email": user.email,
        "role": user.role,
        "is_admin": user.is_admin,
        "email_verified": user.has_verified_email,
    }


def shared_props(request):
    """Props every page receives."""
    flash = {}
    for message in messages.get_messages(request):
        flash[message.level_tag or "info"] = message.message

    session = getattr(request, "session", None)
    errors = session.pop(ERRORS_SESSION_KEY, {}) if session is not None else {}
    old = session.pop(OLD_INPUT_SESSION_KEY, {}) if session is not None else {}

    return {
        "auth": {"user": user_props(request.user)},
        "flash": flash,
        "errors": errors,
        "old": old,
    }


def render_page(request, component, props=None, status=200):
    """Render a page component with its props."""
    page = {
        "component": component,
        "props": {**shared_props(request), **(props or {})},
        "url": request.get_full_path(),
    }

    if request.headers.get("X-Inertia"):
        response = JsonResponse(page, status=status)
        response["X-Inertia"] = "true"
        response["Vary"] = "X-Inertia"
        return response

    return render(request, PAGE_TEMPLATE, {"page": page}, status=status)


class PageView(View):
    """GET view that renders ``component`` with ``get_props()``."""

    component = None

    def get_props(self, **kwargs):
        return {}

    def get(self, request, *args, **kwargs):
        return render_page(request, self.component, self.get_props(**kwargs))


def redirect_back(request, fallback="/"):
    """Redirect to the referring page, or ``fallback`` for foreign/missing referers."""
    referer = request.META.get("HTTP_REFERER")
    if referer and url_has_allowed_host_and_scheme(
        referer,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ):
        return redirect(referer)
    return redirect(fallback)


def form_errors(form):
    """Flatten a bound form's errors to ``{field: first message}``."""
    return {
        field: str(error_list[0])
        for field, error_list in form.errors.items()
    }


def redirect_back_with_errors(request, errors, fallback="/", data=None):
    """Redirect back leaving field errors (and the failed input) in the session."""
    request.session[ERRORS_SESSION_KEY] = errors
    if data is not None:
        request.session[OLD_INPUT_SESSION_KEY] = {
            key: value
            for key, value in data.items()
            if "password" not in key
        }
    logger.debug("Validation failed", extra={"path": request.path, "errors": errors})
    return redirect_back(request, fallback)


def request_data(request):
    """Return the request payload, from a JSON body or form data."""
    if request.content_type == "application/json":
        try:
            payload = json.loads(request.body or b"{}")
        except json.JSONDecodeError:
            return {}
        return payload if isinstance(payload, dict) else {}
    return request.POST


def get_list(data, key):
    """Read a list value from form data (``key`` or ``key[]``) or a JSON payload."""
    if hasattr(data, "getlist"):
        return data.getlist(key) or data.getlist(f"{key}[]")
    value = data.get(key)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def paginate(request, queryset, per_page, serializer):
    """Paginate ``queryset`` into the list payload used by index pages."""
    paginator = Paginator(queryset, per_page)
    page = paginator.get_page(request.GET.get("page"))
    has_items = paginator.count > 0
    return {
        "data": [serializer(obj) for obj in page.object_list],
        "current_page": page.number,
        "last_page": paginator.num_pages,
        "per_page": per_page,
        "total": paginator.count,
        "from": page.start_index() if has_items else None,
        "to": page.end_index() if has_items else None,
    }
