"""Identity bounded context: storefront users and their auth identities.

Every User profile is backed 1:1 by an identity held in the hosted
authentication service; provisioning keeps the two in step.
"""

from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

identity = Domain(name="identity")
