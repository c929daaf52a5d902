# tabstate/constants.py
# Wire-level constants shared by the codec, the parser and the history log

# Viewer page that reconstructs the tab list from the fragment after '#'
SHARE_PREFIX: str = "https://vinodhalaharvi.github.io/tab-state-qr/#"

URL_SEPARATOR: str = "\n"

# Lines not starting with this are dropped on decode
WEB_URL_PREFIX: str = "http"

# Pages the browser owns; never exported
INTERNAL_URL_PREFIXES: tuple[str, ...] = ("chrome://", "chrome-extension://")

HISTORY_KEY: str = "tabstate_history"
HISTORY_CAPACITY: int = 20
PREVIEW_HOSTS: int = 3
PREVIEW_SEPARATOR: str = ", "
