from __future__ import annotations


class MonitorError(Exception):
    pass


class UnknownSeries(MonitorError, KeyError):
    def __init__(self, device_deployment_id: str):
        super().__init__(f"Unknown deviceDeploymentID: {device_deployment_id!r}")
        self.device_deployment_id = device_deployment_id

    def __str__(self) -> str:
        return self.args[0]


class UnknownField(MonitorError, KeyError):
    def __init__(self, field_name: str):
        super().__init__(f"Unknown metadata field: {field_name!r}")
        self.field_name = field_name

    def __str__(self) -> str:
        return self.args[0]


class SchemaMismatch(MonitorError, ValueError):
    pass


class InsufficientData(MonitorError, ValueError):
    pass


class IngestError(MonitorError, RuntimeError):
    pass
