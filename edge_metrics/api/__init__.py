"""
API layer for the edge metrics server.

Exposes HTTP endpoints for the device registry (/config), live device state
and reloads (/devices), fleet summary (/metrics), Kubernetes reconciliation
(/kubernetes) and service health (/health).
"""
