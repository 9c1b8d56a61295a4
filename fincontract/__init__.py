"""fincontract — a single binary options contract and its shortcode codec.

Pillars: core (values, results, calendar), reference (type and category
tables), codec (shortcode decode/encode), contract (derived attributes),
infra (collaborator protocols and adapters).
"""

__version__ = "0.1.0"
