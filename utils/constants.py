APP_NAME = "Service Center Manager"
APP_WIDTH = 1200
APP_HEIGHT = 780

DATE_FORMAT = "%Y-%m-%d"
CURRENCY_SYMBOL = "₹"

# Backend tables
SERVICE_TABLE = "jobcarrd"
EXPENSE_TABLE = "expenses"
SERVICE_TYPE_TABLE = "config_services"
EXPENSE_CATEGORY_TABLE = "config_expenses"

HISTORY_LIMIT = 50
UNIQUE_VIOLATION_CODE = "23505"

DEFAULT_USER_ID = "anon-default-user"
ANON_USER_SUFFIX = "-anon-user"

PAYMENT_MODES = ["Card", "Cash", "Bank Transfer", "Mobile Pay"]

# Option list kinds
SERVICE_TYPES = "service_types"
EXPENSE_CATEGORIES = "expense_categories"
OPTION_KINDS = (SERVICE_TYPES, EXPENSE_CATEGORIES)

# Forms / history feeds
SERVICE = "service"
EXPENSE = "expense"

TABS = ["Service Log", "Expense Log", "Configuration"]

LEVEL_COLORS = {
    "success":    "#4CAF50",
    "validation": "#FF9800",
    "error":      "#F44336",
}
