"""Quote Oracle - cross-implementation swap quote equivalence checks."""

from quote_oracle.config import DEFAULT_ORACLE_CONFIG, OracleConfig
from quote_oracle.engine import EquivalenceOracle, ScenarioOutcome
from quote_oracle.scenarios import Scenario

__version__ = "0.1.0"

__all__ = [
    "EquivalenceOracle",
    "ScenarioOutcome",
    "OracleConfig",
    "DEFAULT_ORACLE_CONFIG",
    "Scenario",
    "__version__",
]
