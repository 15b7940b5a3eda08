"""Make favorites polymorphic: favoritable_type/favoritable_id replace post_id

Revision ID: 7c4e2a91d5b3
Revises: 3b1f0c2d9a10
Create Date: 2026-01-09

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "7c4e2a91d5b3"
down_revision: Union[str, Sequence[str], None] = "3b1f0c2d9a10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table("favorites") as batch_op:
        batch_op.add_column(sa.Column("favoritable_id", sa.Integer(), nullable=True))
        batch_op.add_column(
            sa.Column("favoritable_type", sa.String(length=32), nullable=True)
        )

    # Every existing favorite is a post favorite
    op.execute(
        "UPDATE favorites SET favoritable_type = 'post', favoritable_id = post_id "
        "WHERE post_id IS NOT NULL"
    )

    with op.batch_alter_table("favorites") as batch_op:
        batch_op.drop_constraint("uq_favorites_user_post", type_="unique")
        batch_op.drop_column("post_id")
        batch_op.alter_column(
            "favoritable_id", existing_type=sa.Integer(), nullable=False
        )
        batch_op.alter_column(
            "favoritable_type", existing_type=sa.String(length=32), nullable=False
        )
        batch_op.create_unique_constraint(
            "uq_favorites_user_favoritable",
            ["user_id", "favoritable_id", "favoritable_type"],
        )
        batch_op.create_index(
            "ix_favorites_favoritable", ["favoritable_id", "favoritable_type"]
        )


def downgrade() -> None:
    # User favorites have no post_id to fall back to
    op.execute("DELETE FROM favorites WHERE favoritable_type <> 'post'")

    with op.batch_alter_table("favorites") as batch_op:
        batch_op.add_column(sa.Column("post_id", sa.Integer(), nullable=True))

    op.execute("UPDATE favorites SET post_id = favoritable_id")

    with op.batch_alter_table("favorites") as batch_op:
        batch_op.drop_index("ix_favorites_favoritable")
        batch_op.drop_constraint("uq_favorites_user_favoritable", type_="unique")
        batch_op.drop_column("favoritable_type")
        batch_op.drop_column("favoritable_id")
        batch_op.alter_column("post_id", existing_type=sa.Integer(), nullable=False)
        batch_op.create_foreign_key(
            "fk_favorites_post_id_posts", "posts", ["post_id"], ["id"], ondelete="CASCADE"
        )
        batch_op.create_unique_constraint(
            "uq_favorites_user_post", ["user_id", "post_id"]
        )
