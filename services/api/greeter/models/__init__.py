"""SQLAlchemy ORM models.

Models represent database tables:
- greetings: the greeting message rendered on the home page
"""

from greeter.models.greeting import Greeting

__all__ = ["Greeting"]
