"""
===============================================================================
TARJETA CRC — i18n/translations.py
===============================================================================

Responsabilidades:
  - Tablas de textos de la consola en es / en / zh.
  - Mismo conjunto de claves en los tres idiomas.

Colaboradores:
  - i18n.resolver.Translator

Notas:
  - Placeholders con llaves: "{userName}".
  - Las claves de roles y de acciones de auditoría coinciden con sus valores
    de wire (admin, CREATE_USER, ...) para poder traducirlos directo.
===============================================================================
"""

from __future__ import annotations

from typing import Dict

from ..domain.entities import Language

_ES: Dict[str, str] = {
    # Navegación / cabecera
    "administration": "Administración",
    "applications": "Aplicaciones",
    "users": "Usuarios",
    "reports": "Reportes",
    "settings": "Configuración",
    "profile": "Perfil",
    "login": "Iniciar sesión",
    "logout": "Cerrar sesión",
    "email": "Correo electrónico",
    "password": "Contraseña",
    # Sesión
    "loginSuccessful": "Inicio de sesión exitoso",
    "loginError": "Error al iniciar sesión. Verifica tus credenciales.",
    "sessionRequired": "Debes iniciar sesión para continuar",
    "adminRequired": "Esta acción requiere permisos de administrador",
    # Usuarios
    "userName": "Nombre",
    "userEmail": "Correo",
    "userRole": "Rol",
    "userCompany": "Empresa",
    "userDepartment": "Departamento",
    "userPhone": "Teléfono",
    "status": "Estado",
    "active": "Activo",
    "inactive": "Inactivo",
    "lastLogin": "Último acceso",
    "never": "Nunca",
    "actions": "Acciones",
    "addUser": "Agregar usuario",
    "editUser": "Editar usuario",
    "edit": "Editar",
    "delete": "Eliminar",
    "save": "Guardar",
    "cancel": "Cancelar",
    "searchUsers": "Buscar usuarios...",
    "allRoles": "Todos los roles",
    "allCompanies": "Todas las empresas",
    "allStatuses": "Todos los estados",
    "totalUsers": "Total de usuarios",
    "activeUsers": "Usuarios activos",
    "roleDistribution": "Distribución de roles",
    "noUsersFound": "No se encontraron usuarios",
    "noDataFound": "Sin datos",
    "userCreated": "Usuario creado exitosamente",
    "userUpdated": "Usuario actualizado exitosamente",
    "userDeleted": "Usuario eliminado exitosamente",
    "userDeleteError": "Error al eliminar usuario",
    "userNotFound": "Usuario no encontrado",
    "confirmDelete": "Confirmar eliminación",
    "confirmDeleteMessage": "¿Estás seguro de que deseas eliminar a {userName}?",
    "dataRefreshed": "Datos actualizados",
    "fetchUsersError": "Error al obtener usuarios",
    "supabaseAmbiguousIdError": "Error de base de datos: identificador ambiguo en la consulta de usuarios",
    "databaseFunctionError": "La función get_users_with_emails no está disponible en la base de datos",
    "permissionDenied": "No tienes permisos para realizar esta acción",
    "duplicateEmail": "Ya existe un usuario con este email. Usa un email diferente.",
    "provisioningUnavailable": "La función de creación no está disponible. Contacta al administrador.",
    "createPermissionDenied": "No tienes permisos suficientes para crear usuarios.",
    "networkError": "No se pudo conectar con el servidor",
    "unknownError": "Error desconocido",
    # Validación
    "required": "Este campo es obligatorio",
    "invalidEmail": "Correo electrónico inválido",
    "passwordMinLength": "La contraseña debe tener al menos 6 caracteres",
    # Paginación
    "showing": "Mostrando",
    "to": "a",
    "of": "de",
    "results": "resultados",
    "previous": "Anterior",
    "next": "Siguiente",
    # Reportes
    "reportsTitle": "Reportes de verificación",
    "searchReports": "Buscar por centro o tarea...",
    "totalReports": "Total de reportes",
    "acceptableReports": "Aceptables",
    "notAcceptableReports": "No aceptables",
    "closedReports": "Cerrados",
    "acceptable": "Aceptable",
    "notAcceptable": "No aceptable",
    "closed": "Cerrado",
    "pending": "Pendiente",
    "allResults": "Todos los resultados",
    "allDates": "Todas las fechas",
    "lastWeek": "Última semana",
    "lastMonth": "Último mes",
    "lastQuarter": "Último trimestre",
    "verificationDate": "Fecha de verificación",
    "workCenter": "Centro de trabajo",
    "taskVerified": "Proceso/tarea verificada",
    "finalResult": "Resultado final",
    "closureStatus": "Estado del cierre",
    "viewPdf": "Ver PDF",
    "reportsRefreshed": "Reportes actualizados",
    "fetchReportsError": "Error al obtener reportes",
    "errorLoadingReports": "Error al cargar los reportes",
    "noReportsFound": "No se encontraron reportes",
    "retryLoad": "Reintentar",
    "appsScriptCorsError": "No se pudo contactar el servicio de reportes (CORS o red)",
    # Roles
    "admin": "Administrador",
    "coordinator": "Coordinador",
    "sst_specialist": "Especialista SST",
    "nurse": "Enfermero/a",
    "employee": "Empleado",
    # Acciones de auditoría
    "CREATE_USER": "Crear usuario",
    "UPDATE_USER": "Actualizar usuario",
    "DELETE_USER": "Eliminar usuario",
    "LOGIN": "Inicio de sesión",
    "LOGOUT": "Cierre de sesión",
    "SYNC_USERS": "Sincronizar usuarios",
    "VIEW_REPORTS": "Ver reportes",
    "VIEW_REPORT_PDF": "Ver PDF de reporte",
}

_EN: Dict[str, str] = {
    "administration": "Administration",
    "applications": "Applications",
    "users": "Users",
    "reports": "Reports",
    "settings": "Settings",
    "profile": "Profile",
    "login": "Sign in",
    "logout": "Sign out",
    "email": "Email",
    "password": "Password",
    "loginSuccessful": "Signed in successfully",
    "loginError": "Sign-in failed. Check your credentials.",
    "sessionRequired": "You must sign in to continue",
    "adminRequired": "This action requires administrator permissions",
    "userName": "Name",
    "userEmail": "Email",
    "userRole": "Role",
    "userCompany": "Company",
    "userDepartment": "Department",
    "userPhone": "Phone",
    "status": "Status",
    "active": "Active",
    "inactive": "Inactive",
    "lastLogin": "Last login",
    "never": "Never",
    "actions": "Actions",
    "addUser": "Add user",
    "editUser": "Edit user",
    "edit": "Edit",
    "delete": "Delete",
    "save": "Save",
    "cancel": "Cancel",
    "searchUsers": "Search users...",
    "allRoles": "All roles",
    "allCompanies": "All companies",
    "allStatuses": "All statuses",
    "totalUsers": "Total users",
    "activeUsers": "Active users",
    "roleDistribution": "Role distribution",
    "noUsersFound": "No users found",
    "noDataFound": "No data",
    "userCreated": "User created successfully",
    "userUpdated": "User updated successfully",
    "userDeleted": "User deleted successfully",
    "userDeleteError": "Error deleting user",
    "userNotFound": "User not found",
    "confirmDelete": "Confirm deletion",
    "confirmDeleteMessage": "Are you sure you want to delete {userName}?",
    "dataRefreshed": "Data refreshed",
    "fetchUsersError": "Error fetching users",
    "supabaseAmbiguousIdError": "Database error: ambiguous identifier in the users query",
    "databaseFunctionError": "The get_users_with_emails function is not available in the database",
    "permissionDenied": "You do not have permission to perform this action",
    "duplicateEmail": "A user with this email already exists. Use a different email.",
    "provisioningUnavailable": "The user creation function is not available. Contact the administrator.",
    "createPermissionDenied": "You do not have enough permissions to create users.",
    "networkError": "Could not connect to the server",
    "unknownError": "Unknown error",
    "required": "This field is required",
    "invalidEmail": "Invalid email address",
    "passwordMinLength": "Password must be at least 6 characters",
    "showing": "Showing",
    "to": "to",
    "of": "of",
    "results": "results",
    "previous": "Previous",
    "next": "Next",
    "reportsTitle": "Verification reports",
    "searchReports": "Search by work center or task...",
    "totalReports": "Total reports",
    "acceptableReports": "Acceptable",
    "notAcceptableReports": "Not acceptable",
    "closedReports": "Closed",
    "acceptable": "Acceptable",
    "notAcceptable": "Not acceptable",
    "closed": "Closed",
    "pending": "Pending",
    "allResults": "All results",
    "allDates": "All dates",
    "lastWeek": "Last week",
    "lastMonth": "Last month",
    "lastQuarter": "Last quarter",
    "verificationDate": "Verification date",
    "workCenter": "Work center",
    "taskVerified": "Verified process/task",
    "finalResult": "Final result",
    "closureStatus": "Closure status",
    "viewPdf": "View PDF",
    "reportsRefreshed": "Reports refreshed",
    "fetchReportsError": "Error fetching reports",
    "errorLoadingReports": "Error loading reports",
    "noReportsFound": "No reports found",
    "retryLoad": "Retry",
    "appsScriptCorsError": "Could not reach the reports service (CORS or network)",
    "admin": "Administrator",
    "coordinator": "Coordinator",
    "sst_specialist": "OSH specialist",
    "nurse": "Nurse",
    "employee": "Employee",
    "CREATE_USER": "Create user",
    "UPDATE_USER": "Update user",
    "DELETE_USER": "Delete user",
    "LOGIN": "Sign in",
    "LOGOUT": "Sign out",
    "SYNC_USERS": "Sync users",
    "VIEW_REPORTS": "View reports",
    "VIEW_REPORT_PDF": "View report PDF",
}

_ZH: Dict[str, str] = {
    "administration": "管理",
    "applications": "应用",
    "users": "用户",
    "reports": "报告",
    "settings": "设置",
    "profile": "个人资料",
    "login": "登录",
    "logout": "退出登录",
    "email": "电子邮件",
    "password": "密码",
    "loginSuccessful": "登录成功",
    "loginError": "登录失败，请检查您的凭据。",
    "sessionRequired": "请先登录",
    "adminRequired": "此操作需要管理员权限",
    "userName": "姓名",
    "userEmail": "邮箱",
    "userRole": "角色",
    "userCompany": "公司",
    "userDepartment": "部门",
    "userPhone": "电话",
    "status": "状态",
    "active": "活跃",
    "inactive": "停用",
    "lastLogin": "最后登录",
    "never": "从未",
    "actions": "操作",
    "addUser": "添加用户",
    "editUser": "编辑用户",
    "edit": "编辑",
    "delete": "删除",
    "save": "保存",
    "cancel": "取消",
    "searchUsers": "搜索用户...",
    "allRoles": "所有角色",
    "allCompanies": "所有公司",
    "allStatuses": "所有状态",
    "totalUsers": "用户总数",
    "activeUsers": "活跃用户",
    "roleDistribution": "角色分布",
    "noUsersFound": "未找到用户",
    "noDataFound": "无数据",
    "userCreated": "用户创建成功",
    "userUpdated": "用户更新成功",
    "userDeleted": "用户删除成功",
    "userDeleteError": "删除用户时出错",
    "userNotFound": "未找到用户",
    "confirmDelete": "确认删除",
    "confirmDeleteMessage": "您确定要删除 {userName} 吗？",
    "dataRefreshed": "数据已刷新",
    "fetchUsersError": "获取用户时出错",
    "supabaseAmbiguousIdError": "数据库错误：用户查询中的标识符不明确",
    "databaseFunctionError": "数据库中没有 get_users_with_emails 函数",
    "permissionDenied": "您没有执行此操作的权限",
    "duplicateEmail": "该邮箱的用户已存在，请使用其他邮箱。",
    "provisioningUnavailable": "用户创建功能不可用，请联系管理员。",
    "createPermissionDenied": "您没有足够的权限创建用户。",
    "networkError": "无法连接到服务器",
    "unknownError": "未知错误",
    "required": "此字段为必填项",
    "invalidEmail": "电子邮件地址无效",
    "passwordMinLength": "密码至少需要 6 个字符",
    "showing": "显示",
    "to": "至",
    "of": "共",
    "results": "条结果",
    "previous": "上一页",
    "next": "下一页",
    "reportsTitle": "验证报告",
    "searchReports": "按地点或任务搜索...",
    "totalReports": "报告总数",
    "acceptableReports": "可接受",
    "notAcceptableReports": "不可接受",
    "closedReports": "已关闭",
    "acceptable": "可接受",
    "notAcceptable": "不可接受",
    "closed": "已关闭",
    "pending": "待处理",
    "allResults": "所有结果",
    "allDates": "所有日期",
    "lastWeek": "最近一周",
    "lastMonth": "最近一个月",
    "lastQuarter": "最近一个季度",
    "verificationDate": "验证日期",
    "workCenter": "地点",
    "taskVerified": "已验证的流程/任务",
    "finalResult": "最终结果",
    "closureStatus": "关闭状态",
    "viewPdf": "查看 PDF",
    "reportsRefreshed": "报告已刷新",
    "fetchReportsError": "获取报告时出错",
    "errorLoadingReports": "加载报告时出错",
    "noReportsFound": "未找到报告",
    "retryLoad": "重试",
    "appsScriptCorsError": "无法访问报告服务（CORS 或网络）",
    "admin": "管理员",
    "coordinator": "协调员",
    "sst_specialist": "职业安全专家",
    "nurse": "护士",
    "employee": "员工",
    "CREATE_USER": "创建用户",
    "UPDATE_USER": "更新用户",
    "DELETE_USER": "删除用户",
    "LOGIN": "登录",
    "LOGOUT": "退出登录",
    "SYNC_USERS": "同步用户",
    "VIEW_REPORTS": "查看报告",
    "VIEW_REPORT_PDF": "查看报告 PDF",
}

TRANSLATIONS: Dict[Language, Dict[str, str]] = {
    Language.ES: _ES,
    Language.EN: _EN,
    Language.ZH: _ZH,
}
