"""Demo-mode farm backend."""

from .demo_gateway import DEMO_PASSWORD, DemoFarmGateway

__all__ = ["DEMO_PASSWORD", "DemoFarmGateway"]
