import os

CONFIG_FILE = "lan_chat_config.json"
LOCAL_CHAT_ROOT = ".local_chat"
PREFERENCES_FILE = os.path.join(LOCAL_CHAT_ROOT, "preferences.json")

DEFAULT_SERVER_URL = "http://127.0.0.1:8080"
MESSAGES_PATH = "/messages"
PEERS_PATH = "/peers"
CLEAR_PATH = "/clear"
HTTP_TIMEOUT_SECONDS = 10.0

# Cadences are expressed in time units; the unit length is configurable
# but the 1:6 message/peer ratio is fixed.
TIME_UNIT_SECONDS = 1.0
MESSAGE_POLL_UNITS = 5
PEER_POLL_UNITS = 30
STATUS_CLEAR_UNITS = 3

MAX_MESSAGE_LENGTH = 1000
MAX_USERNAME_LENGTH = 50

READY_STATUS = "Ready"
PREF_USERNAME = "username"
PREF_THEME = "theme"
DEFAULT_THEME = "light"

LOCK_TIMEOUT_SECONDS = 2.0

THEMES = {
    "light": {
        "chat-area": "bg:#ffffff #1f2328",
        "input-area": "bg:#f0f2f5 #1f2328",
        "sidebar": "bg:#f6f8fa #0969da",
        "frame.label": "bg:#00a884 #ffffff bold",
        "status": "bg:#e9edef #54656f",
        "status.error": "bg:#e9edef #e53e3e bold",
        "own": "fg:#008069 bold",
        "author": "fg:#6a1b9a bold",
        "timestamp": "fg:#8696a0",
        "system": "fg:#8696a0 italic",
    },
    "dark": {
        "chat-area": "bg:#0b141a #e9edef",
        "input-area": "bg:#202c33 #e9edef",
        "sidebar": "bg:#111b21 #00a884",
        "frame.label": "bg:#005c4b #e9edef bold",
        "status": "bg:#202c33 #8696a0",
        "status.error": "bg:#202c33 #f15c6d bold",
        "own": "fg:#00a884 bold",
        "author": "fg:#53bdeb bold",
        "timestamp": "fg:#8696a0",
        "system": "fg:#8696a0 italic",
    },
}
