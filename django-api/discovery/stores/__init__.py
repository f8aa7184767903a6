from discovery.stores.interfaces import EventStore, ProfileStore

__all__ = [
    "EventStore",
    "ProfileStore",
]
