from discovery.manifest import overrides_from_manifest

__all__ = ["overrides_from_manifest"]
