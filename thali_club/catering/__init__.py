"""
Catering Order Configurator.

The core of the catering page:
- Catalog of packages and their configuration steps
- Wizard state machine that enforces per-step selection counts
- Pricing engine for per-person and per-weight quotations
- Snapshot persistence so an order survives a reload or restart
- Submission gateway that hands a finished order to the email relay
  (import from thali_club.catering.submission; it depends on the relay schemas)
"""

from .catalog import (
    PricingModel,
    StepKind,
    StepDefinition,
    Package,
    Catalog,
    get_default_catalog,
)

from .models import (
    WizardState,
    PartySize,
    WeightKg,
    ContactForm,
    WizardSession,
)

from .pricing import (
    PricingPolicy,
    PricingEngine,
    Quote,
    round_money,
)

from .wizard import (
    UnknownPackageError,
    WizardStateMachine,
)

from .persistence import (
    SnapshotStore,
    SnapshotWriter,
    to_snapshot,
    from_snapshot,
    get_snapshot_writer,
)

__all__ = [
    "PricingModel",
    "StepKind",
    "StepDefinition",
    "Package",
    "Catalog",
    "get_default_catalog",
    "WizardState",
    "PartySize",
    "WeightKg",
    "ContactForm",
    "WizardSession",
    "PricingPolicy",
    "PricingEngine",
    "Quote",
    "round_money",
    "UnknownPackageError",
    "WizardStateMachine",
    "SnapshotStore",
    "SnapshotWriter",
    "to_snapshot",
    "from_snapshot",
    "get_snapshot_writer",
]
