import logging

import pytest
from loguru import logger

from app.core.deps import require_role
from app.core.errors import Forbidden
from app.core.logging import InterceptHandler
from app.models.user import Role, User


def test_intercepted_records_point_at_caller():
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")

    std_logger = logging.getLogger("tests.intercept")
    std_logger.handlers = [InterceptHandler()]
    std_logger.propagate = False
    std_logger.setLevel(logging.INFO)
    try:
        std_logger.info("hello from stdlib")
    finally:
        logger.remove(sink_id)

    record = records[-1]
    assert record["message"] == "hello from stdlib"
    assert record["function"] == "test_intercepted_records_point_at_caller"
    assert record["name"] == __name__


def test_require_role_message_names_allowed_roles():
    checker = require_role(Role.CLUB_HEAD, Role.SUPER_ADMIN)
    student = User(first_name="Bob", last_name="Lee", email="bob@test.com", role=Role.STUDENT)

    with pytest.raises(Forbidden) as exc:
        checker(student)
    assert exc.value.message == "Access denied. Club head or super admin required."

    head = User(first_name="Jane", last_name="Smith", email="jane@test.com", role=Role.CLUB_HEAD)
    assert checker(head) is head


def test_super_admin_only_message():
    student = User(first_name="Bob", last_name="Lee", email="bob@test.com", role=Role.STUDENT)
    with pytest.raises(Forbidden) as exc:
        require_role(Role.SUPER_ADMIN)(student)
    assert exc.value.message == "Access denied. Super admin required."
