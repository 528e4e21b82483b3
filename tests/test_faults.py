"""
Fault base type and domains.
"""

import pytest

from aquiladmin.admin.faults import AdminNotFoundFault
from aquiladmin.faults import ConfigInvalidFault, Fault, FaultDomain, Severity


class TestFault:

    def test_str_carries_code(self):
        fault = Fault("SOME_CODE", "Something broke", domain=FaultDomain.DI)

        assert str(fault) == "[SOME_CODE] Something broke"
        assert fault.message == "Something broke"
        assert fault.args == ("Something broke",)

    def test_severity_defaults_to_domain(self):
        assert Fault("X", "x", domain=FaultDomain.DI).severity == Severity.ERROR
        assert Fault("X", "x", domain=FaultDomain.CONFIG).severity == Severity.FATAL
        assert Fault("X", "x", domain=FaultDomain.CONFIG, severity=Severity.ERROR).severity == Severity.ERROR

    def test_class_attributes(self):
        class MissingThing(Fault):
            code = "MISSING_THING"
            message = "Thing is missing"
            domain = FaultDomain.DI

        fault = MissingThing()

        assert str(fault) == "[MISSING_THING] Thing is missing"
        assert fault.metadata == {}

    def test_missing_code_is_type_error(self):
        with pytest.raises(TypeError):
            Fault(message="x", domain=FaultDomain.DI)


class TestFaultDomain:

    def test_equality(self):
        assert FaultDomain.ADMIN == FaultDomain("admin")
        assert FaultDomain.ADMIN == "admin"
        assert hash(FaultDomain.ADMIN) == hash(FaultDomain("admin"))

    def test_subsystem_faults(self):
        assert AdminNotFoundFault("app.admin.post").domain == FaultDomain.ADMIN
        assert ConfigInvalidFault("title", "empty").severity == Severity.FATAL
