# alembic/versions/0001_initial.py
# initial schema for users, cars and bookings
from alembic import op
import sqlalchemy as sa

revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('image', sa.String(length=512), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('cars',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('brand', sa.String(length=100), nullable=False),
        sa.Column('model', sa.String(length=100), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('transmission', sa.String(length=50), nullable=False),
        sa.Column('fuel_type', sa.String(length=50), nullable=False),
        sa.Column('seating_capacity', sa.Integer(), nullable=False),
        sa.Column('price_per_day', sa.Numeric(10, 2), nullable=False),
        sa.Column('image', sa.String(length=512), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_available', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('price_per_day > 0', name='check_car_price_positive'),
    )
    op.create_index('ix_cars_id', 'cars', ['id'])
    op.create_index('ix_cars_owner_id', 'cars', ['owner_id'])
    op.create_index('ix_cars_location', 'cars', ['location'])

    op.create_table('bookings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('renter_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('car_id', sa.Integer(), sa.ForeignKey('cars.id'), nullable=False),
        sa.Column('pickup_at', sa.DateTime(), nullable=False),
        sa.Column('return_at', sa.DateTime(), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('return_at > pickup_at', name='check_booking_range'),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'cancelled')", name='check_booking_status'
        ),
    )
    op.create_index('ix_bookings_id', 'bookings', ['id'])
    op.create_index('ix_bookings_renter_id', 'bookings', ['renter_id'])
    op.create_index('ix_bookings_owner_id', 'bookings', ['owner_id'])
    op.create_index('ix_bookings_created_at', 'bookings', ['created_at'])
    op.create_index(
        'ix_bookings_car_window', 'bookings', ['car_id', 'status', 'pickup_at', 'return_at']
    )


def downgrade():
    op.drop_table('bookings')
    op.drop_table('cars')
    op.drop_table('users')
