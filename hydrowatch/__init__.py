"""
HydroWatch

Pulls water-sensor readings from a public water-services provider, encodes
them with weather context into inference feature rows, asks a hosted model
for an expected value and flags readings that stray too far from it.

Layers:
- domain: entities, decision rules and the ports/gateways they depend on
- application: use cases orchestrating fetch, encode, infer and decide
- infrastructure: httpx gateways, GridFS storage, Celery worker plumbing
- presentation: FastAPI controllers
- shared: logging and environment helpers
- main: settings, DI container, FastAPI app and worker entry points
"""
