"""
Workflow Kernel

Pure core of the workflow designer:
- Immutable graph aggregate (nodes, edges) referenced by string ids
- Typed contract-violation exceptions
- Declared graph invariants
- Structured JSON logging
"""

__version__ = "0.1.0"
