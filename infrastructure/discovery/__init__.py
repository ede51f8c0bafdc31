from .load_balancer import (
    LoadBalancer,
    RandomLoadBalancer,
    RoundRobinLoadBalancer,
    create_load_balancer,
)
from .registry import EurekaServiceRegistry, ServiceRegistry, StaticServiceRegistry

__all__ = [
    'LoadBalancer',
    'RandomLoadBalancer',
    'RoundRobinLoadBalancer',
    'create_load_balancer',
    'EurekaServiceRegistry',
    'ServiceRegistry',
    'StaticServiceRegistry',
]
