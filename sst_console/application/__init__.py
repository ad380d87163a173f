"""
===============================================================================
APPLICATION LAYER (Public API / Exports)
===============================================================================

Expone los puntos de entrada estables de la capa de aplicación:
  - UserDirectory: CRUD de perfiles contra el backend de identidad
  - ReportCatalog: lectura y validación de reportes de cumplimiento
  - UserManagementView / ReportsView: estado de cada vista de la consola
  - ToastCenter: notificaciones transitorias
  - LanguagePreference: idioma persistido del operador
===============================================================================
"""

from .console import ReportsView, UserManagementView
from .preferences import LanguagePreference
from .report_catalog import ReportCatalog
from .report_views import ReportFilters, ReportStatistics, report_statistics
from .toasts import ToastCenter
from .user_directory import UserDirectory
from .user_views import UserFilters, UserStatistics, user_statistics

__all__ = [
    # Datos
    "UserDirectory",
    "ReportCatalog",
    # Vistas
    "UserManagementView",
    "ReportsView",
    "UserFilters",
    "UserStatistics",
    "user_statistics",
    "ReportFilters",
    "ReportStatistics",
    "report_statistics",
    # Estado transversal
    "ToastCenter",
    "LanguagePreference",
]
