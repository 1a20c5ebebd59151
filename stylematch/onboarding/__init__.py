"""
Stylist onboarding.

Responsibilities:
- Register a stylist's location and specialties with an initial Elo rating.
- Publish the stylist's service offerings and add-ons to the catalog.
- Grant the STYLIST role in the external identity service, rolling the
  catalog back if the grant fails.
"""
