"""Shell — интерактивная оболочка и CLI калькулятора матриц.

Логирование, конфигурация и диалог с пользователем живут здесь; ядро
(src.core) вызывается с уже разобранными операндами.
"""

from .session import MatrixSession
from .settings import CalculatorSettings, load_settings

__all__ = [
    "MatrixSession",
    "CalculatorSettings",
    "load_settings",
]
