"""API module for designpoll.

API layer:
- Validates inputs, reads/writes DB through domain modules
- Returns payloads for the survey UI and admin dashboard
- Forbidden: statistics computation outside the aggregation package
"""
