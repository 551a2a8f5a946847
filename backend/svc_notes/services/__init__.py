# Services package init
"""
svc-notes: Services Layer
===========================

What:  Business logic between the routes (HTTP) and the gateway (persistence).

Service Inventory:
    - NoteService: content validation, note creation/listing, metric updates
"""
