"""Add room column to purchases

Revision ID: b7e3d915c2a8
Revises: a1c4e2f7b9d0
Create Date: 2026-10-19 10:31:05.947120

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "b7e3d915c2a8"
down_revision: Union[str, None] = "a1c4e2f7b9d0"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column(
        "purchases",
        sa.Column("room", sa.String(64), nullable=False, server_default=""),
    )


def downgrade() -> None:
    with op.batch_alter_table("purchases") as batch_op:
        batch_op.drop_column("room")
