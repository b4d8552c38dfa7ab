from utils.constants import ANON_USER_SUFFIX, DEFAULT_USER_ID


def get_anonymous_user_id(app_id: str | None) -> str:
    """Stable attribution label for this deployment; not a credential."""
    app_id = (app_id or "").strip()
    if not app_id:
        return DEFAULT_USER_ID
    return f"{app_id}{ANON_USER_SUFFIX}"
