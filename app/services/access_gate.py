from collections.abc import Mapping


def parse_allow_users(raw: str | None) -> dict[str, str]:
    """
    Parse a comma-separated allow-list of user:password pairs

    Blank items and items without a username are skipped. A pair without a
    colon allows that user with an empty password.

    Args:
        raw: Allow-list string, e.g. "alice:secret,bob:hunter2"

    Returns:
        Mapping of username to password
    """
    allowed: dict[str, str] = {}
    for pair in (raw or "").split(","):
        pair = pair.strip()
        if not pair:
            continue
        username, _, password = pair.partition(":")
        if username:
            allowed[username] = password
    return allowed


class AccessGate:
    """Username/password check against a fixed allow-list"""

    def __init__(self, allowed: Mapping[str, str]):
        self._allowed = dict(allowed)

    @property
    def open_mode(self) -> bool:
        """True when no allow-list is configured and everyone is accepted"""
        return not self._allowed

    def is_authorized(self, username: str, password: str) -> bool:
        if self.open_mode:
            return True
        expected = self._allowed.get(username)
        return expected is not None and expected == (password or "")
