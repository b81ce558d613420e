from enum import Enum


class AppHealthStatus(Enum):
    UP = 200
    DOWN = 503

    @property
    def http_status(self) -> int:
        return self.value


class ComponentHealthStatus(Enum):
    UP = "UP"
    DOWN = "DOWN"
