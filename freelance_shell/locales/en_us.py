"""English base messages."""

MESSAGES = {
    "common": {
        "add": "Add",
        "edit": "Edit",
        "delete": "Delete",
        "save": "Save",
        "cancel": "Cancel",
        "confirm": "Confirm",
        "loading": "Loading...",
        "noData": "No data",
    },
    "splash": {
        "tagline": "Streamline your freelance business",
        "initializing": "Initializing...",
        "start": "Start",
    },
    "auth": {
        "welcome": "Welcome Back",
        "login": "Login",
        "createAccount": "Create Account",
        "logout": "Logout",
        "switchUser": "Switch User",
        "greeting": "Hello, {name}",
    },
    "nav": {
        "dashboard": "Dashboard",
        "clients": "Clients",
        "projects": "Projects",
        "timesheet": "Timesheet",
        "invoices": "Invoices",
        "reports": "Reports",
        "settings": "Settings",
        "help": "Help",
    },
    "settings": {
        "general": {"title": "General"},
        "profile": {"title": "Profile"},
        "invoice": {"title": "Invoice"},
        "email": {"title": "Email"},
    },
}
