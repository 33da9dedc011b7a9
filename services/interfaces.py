from abc import ABC, abstractmethod


class ILogger(ABC):
    @abstractmethod
    def info(self, message: str): pass
    @abstractmethod
    def error(self, message: str): pass
    @abstractmethod
    def warning(self, message: str): pass
    @abstractmethod
    def debug(self, message: str): pass

class IMessenger(ABC):
    @abstractmethod
    def success(self, message: str): pass
    @abstractmethod
    def error(self, message: str): pass
    @abstractmethod
    def info(self, message: str): pass
    @abstractmethod
    def warning(self, message: str): pass

class IProcessRunner(ABC):
    @abstractmethod
    def run(self, executable: str, arguments: list[str]) -> int: pass

class IConnectionFactory(ABC):
    @abstractmethod
    def connect(self, schema_scoped: bool): pass
