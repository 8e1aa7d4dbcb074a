from __future__ import annotations

import pytest

from lib_machine_settings.domain.errors import InvalidPolicy, MachineSettingsError
from lib_machine_settings.domain.policy import ErrorPolicy


@pytest.mark.parametrize(
    ("alias", "expected"),
    [
        ("silent", ErrorPolicy.SILENT),
        ("SUPPRESS", ErrorPolicy.SILENT),
        ("nil", ErrorPolicy.SILENT),
        ("warning", ErrorPolicy.WARN),
        (" warn ", ErrorPolicy.WARN),
        ("hard-fail", ErrorPolicy.FATAL),
        ("error", ErrorPolicy.FATAL),
        (ErrorPolicy.FATAL, ErrorPolicy.FATAL),
        (None, ErrorPolicy.WARN),
    ],
)
def test_error_policy_aliases(alias, expected) -> None:
    assert ErrorPolicy.parse(alias) is expected


def test_error_policy_rejects_unknown_alias() -> None:
    with pytest.raises(InvalidPolicy) as excinfo:
        ErrorPolicy.parse("loud")
    assert isinstance(excinfo.value, MachineSettingsError)
