"""Simplified Chinese base messages."""

MESSAGES = {
    "common": {
        "add": "添加",
        "edit": "编辑",
        "delete": "删除",
        "save": "保存",
        "cancel": "取消",
        "confirm": "确认",
        "loading": "加载中...",
        "noData": "暂无数据",
    },
    "splash": {
        "tagline": "让自由职业更高效",
        "initializing": "正在初始化...",
        "start": "开始",
    },
    "auth": {
        "welcome": "欢迎回来",
        "login": "登录",
        "createAccount": "创建账户",
        "logout": "退出登录",
        "switchUser": "切换用户",
        "greeting": "你好，{name}",
    },
    "nav": {
        "dashboard": "仪表盘",
        "clients": "客户",
        "projects": "项目",
        "timesheet": "工时",
        "invoices": "发票",
        "reports": "报表",
        "settings": "设置",
        "help": "帮助",
    },
    "settings": {
        "general": {"title": "通用"},
        "profile": {"title": "个人资料"},
        "invoice": {"title": "发票"},
        "email": {"title": "邮件"},
    },
}
