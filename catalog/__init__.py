import os

from . import fakestore

GATEWAYS = {
    "fakestore": fakestore,
}

CATALOG_SOURCE = os.getenv("CATALOG_SOURCE", "fakestore").strip().lower()


def get_gateway(source: str | None = None):
    name = (source or CATALOG_SOURCE).strip().lower()
    gateway = GATEWAYS.get(name)
    if gateway is None:
        raise KeyError(f"No catalog gateway registered for '{name}'")
    return gateway
