# rentdrive/utils.py
import json

from flask import make_response


def alert_redirect(message, location, status=200):
    """Inline acknowledgement: show a browser alert, then navigate away."""
    # json.dumps keeps quotes out of the script; the </ escape keeps the tag closed
    body = "<script>alert({}); window.location.href={};</script>".format(
        json.dumps(message).replace('</', '<\\/'),
        json.dumps(location).replace('</', '<\\/'),
    )
    return make_response(body, status)


def missing_fields(form, names):
    return [name for name in names if not (form.get(name) or '').strip()]
