from typing import Final

# Meal periods and the special "show everything" filter value
BREAKFAST: Final[str] = "breakfast"
LUNCH: Final[str] = "lunch"
DINNER: Final[str] = "dinner"
FILTER_ALL: Final[str] = "all"
MEAL_PERIODS: Final[tuple[str, ...]] = (BREAKFAST, LUNCH, DINNER)
FILTER_VALUES: Final[tuple[str, ...]] = (FILTER_ALL,) + MEAL_PERIODS

# Local hour boundaries, [start, end)
BREAKFAST_HOURS: Final[tuple[int, int]] = (6, 10)
LUNCH_HOURS: Final[tuple[int, int]] = (10, 16)

# Persistence record
STORAGE_KEY: Final[str] = "foods"
SCHEMA_VERSION: Final[int] = 1

PERIOD_LABELS: Final[dict[str, str]] = {
    BREAKFAST: "早餐时段",
    LUNCH: "中餐时段",
    DINNER: "晚餐时段",
}
TAG_LABELS: Final[dict[str, str]] = {
    BREAKFAST: "早餐",
    LUNCH: "中餐",
    DINNER: "晚餐",
}
TIME_FORMAT: Final[str] = "%H:%M:%S"
STATUS_TEMPLATE: Final[str] = "当前时间：{time} | {label}"

# User-facing messages
MSG_EMPTY_NAME: Final[str] = "请输入食物名称！"
MSG_ADDED: Final[str] = "添加成功！"
MSG_NO_ELIGIBLE: Final[str] = "当前时段没有可抽取的食物，请先添加食物！"
MSG_EMPTY_LIST: Final[str] = "暂无食物，快去添加吧！"
MSG_LOTTERY_BUSY: Final[str] = "抽取中..."
MSG_DELETED: Final[str] = "已删除"
MSG_CONFIRM_DELETE: Final[str] = "确定要删除这个食物吗？"

FOOD_ICONS: Final[tuple[str, ...]] = (
    "🍜", "🍱", "🍛", "🍝", "🍕", "🍔", "🌮", "🌯", "🥗", "🥙",
    "🍲", "🍳", "🥘", "🍣", "🍤", "🥟", "🍙", "🍘", "🥠", "🍢",
)

SEED_FOODS: Final[list[dict]] = [
    {"id": 1, "name": "豆浆油条", "tags": [BREAKFAST]},
    {"id": 2, "name": "煎饼果子", "tags": [BREAKFAST]},
    {"id": 3, "name": "包子馒头", "tags": [BREAKFAST]},
    {"id": 4, "name": "牛肉面", "tags": [BREAKFAST, LUNCH, DINNER]},
    {"id": 5, "name": "宫保鸡丁", "tags": [LUNCH, DINNER]},
    {"id": 6, "name": "麻婆豆腐", "tags": [LUNCH, DINNER]},
    {"id": 7, "name": "红烧肉", "tags": [LUNCH, DINNER]},
    {"id": 8, "name": "水煮鱼", "tags": [LUNCH, DINNER]},
    {"id": 9, "name": "炒饭", "tags": [LUNCH, DINNER]},
    {"id": 10, "name": "火锅", "tags": [DINNER]},
    {"id": 11, "name": "烧烤", "tags": [DINNER]},
    {"id": 12, "name": "披萨", "tags": [LUNCH, DINNER]},
]
