ADMIN_PAGE_PREFIX = "/admin"
ADMIN_API_PREFIX = "/api/admin"

DASHBOARD_PAGE_URL = "/admin"
LOGIN_PAGE_URL = "/admin/login"

LOGIN_URL = "/api/admin/login"
LOGOUT_URL = "/api/admin/logout"
LIST_RSVPS_URL = "/api/admin/rsvps"
