from datetime import UTC, datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, MappedAsDataclass, mapped_column


class AddedAtMixin(MappedAsDataclass):
    """Mixin adding an insertion timestamp.

    Rows in this service are append-only, so there is no ``updated_at`` column.
    The value is informational: nothing expires or versions on it.

    Attributes:
        added_at: Timezone-aware UTC timestamp set when the row is created.
    """

    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default_factory=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
        init=False,
    )
