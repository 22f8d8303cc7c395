"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import CompanyFactory, EmployeeFactory, ...
"""

from tests.factories.base import BaseFactory, short_token, utc_now
from tests.factories.company import CompanyFactory
from tests.factories.employee import EmployeeFactory
from tests.factories.project import ProjectFactory

__all__ = [
    # Base
    "BaseFactory",
    "short_token",
    "utc_now",
    # Models
    "CompanyFactory",
    "EmployeeFactory",
    "ProjectFactory",
]
