"""SQLAlchemy model package.

Import model modules here as they are added so Alembic autogenerate
can discover them via metadata.
"""

from liftlog.db.models.user import User  # noqa: F401
from liftlog.db.models.exercise import Exercise  # noqa: F401
from liftlog.db.models.workout import Workout  # noqa: F401
from liftlog.db.models.workout_exercise import WorkoutExercise  # noqa: F401

from liftlog.db.session import Base


def create_schema(engine) -> None:
    """Create any missing tables. Deployments run the Alembic migrations instead."""
    Base.metadata.create_all(engine)
