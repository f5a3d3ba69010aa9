"""Domain layer - Core business logic, entities, and rules.

This layer contains:
- Entities: Objects with identity and lifecycle (Customer, Invoice, Payment)
- Value Objects: Immutable objects defined by their attributes (LineItem, ids, money)
- Domain Exceptions: Business rule violations

The domain layer has NO dependencies on external frameworks or infrastructure.
"""
