from discovery.services.discovery_service import DiscoveryService

__all__ = ["DiscoveryService"]
