"""Topology Bounded Context.

Responsible for the physical layout of the towed spread:
- Value Objects: Topology, TopologyOverride, Project
- Services: resolve_topology, resolve_effective_topology
"""
