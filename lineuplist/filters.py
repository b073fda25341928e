import json
from dataclasses import asdict, is_dataclass

from markupsafe import Markup


def _default(obj):
    if is_dataclass(obj):
        return asdict(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    return str(obj)


def stringify(obj) -> str:
    return json.dumps(obj, default=_default)


def gt(a, b) -> bool:
    return a > b


def disable_option_if_region(festival) -> str:
    """Region separators in the festival dropdown have no name and can't be picked."""
    return "disabled" if len(festival.name) < 1 else ""


def format_date(value) -> Markup:
    if value is None:
        return Markup("")
    # same shape as JS Date.toDateString(): "Sat Apr 13 2024"
    return Markup(value.strftime("%a %b %d %Y"))


def register_filters(app):
    app.jinja_env.filters["stringify"] = stringify
    app.jinja_env.filters["gt"] = gt
    app.jinja_env.filters["disableoptionifregion"] = disable_option_if_region
    app.jinja_env.filters["formatDate"] = format_date
