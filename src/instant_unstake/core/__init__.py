"""
Core domain models, fixed-point primitives, and invariants.

This module contains the foundational building blocks of the pool engine
that are independent of any driver (CLI, RPC, on-chain entry point).
"""
