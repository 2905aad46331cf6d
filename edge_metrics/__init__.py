"""Edge metrics server: device registry, Kubernetes mirroring and fleet bulk operations."""
