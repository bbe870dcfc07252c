from lan_chat.remote.base import Presenter, RemoteClient
from lan_chat.remote.http_client import HttpRemoteClient

__all__ = ["HttpRemoteClient", "Presenter", "RemoteClient"]
