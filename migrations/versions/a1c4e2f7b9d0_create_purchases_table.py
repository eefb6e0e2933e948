"""Create purchases table

Revision ID: a1c4e2f7b9d0
Revises:
Create Date: 2026-10-19 10:12:40.512334

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a1c4e2f7b9d0"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "purchases",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("link", sa.String(2048), nullable=False, server_default=""),
        sa.Column("cost", sa.Float(), nullable=False),
        sa.Column(
            "bought", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column("comments", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("purchases")
