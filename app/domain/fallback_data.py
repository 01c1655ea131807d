from app.domain.models import MenuItem, Restaurant

DEFAULT_MENU_CATEGORY = "現代美式料理"

FALLBACK_RESTAURANTS = [
    Restaurant(id="1", name="熾熱鐵板燒", category="現代美式料理", rating=4.7, reviews=345, delivery_time="25-35 分鐘", min_order=150, image="https://picsum.photos/500/300?random=1"),
    Restaurant(id="2", name="京都花開壽司", category="日式料理 & 壽司", rating=4.9, reviews=512, delivery_time="30-40 分鐘", min_order=200, image="https://picsum.photos/500/300?random=2"),
    Restaurant(id="3", name="義大利麵萬歲", category="義式料理 & 披薩", rating=4.6, reviews=420, delivery_time="20-30 分鐘", min_order=120, image="https://picsum.photos/500/300?random=3"),
    Restaurant(id="4", name="塔可真好吃", category="墨西哥料理 & 塔可", rating=4.5, reviews=288, delivery_time="15-25 分鐘", min_order=80, image="https://picsum.photos/500/300?random=4"),
    Restaurant(id="5", name="正宗川菜館", category="中式料理", rating=4.8, reviews=389, delivery_time="30-40 分鐘", min_order=180, image="https://picsum.photos/500/300?random=5"),
    Restaurant(id="6", name="法式甜點屋", category="甜點 & 蛋糕", rating=4.9, reviews=267, delivery_time="20-30 分鐘", min_order=100, image="https://picsum.photos/500/300?random=6"),
    Restaurant(id="7", name="泰式風味", category="泰式料理", rating=4.4, reviews=312, delivery_time="25-35 分鐘", min_order=150, image="https://picsum.photos/500/300?random=7"),
    Restaurant(id="8", name="健康蔬食", category="素食 & 健康餐", rating=4.6, reviews=198, delivery_time="15-25 分鐘", min_order=120, image="https://picsum.photos/500/300?random=8"),
]

# category -> (id, name, price)
FALLBACK_MENUS = {
    "現代美式料理": [
        ("m1", "經典漢堡", 180), ("m2", "起司漢堡", 200), ("m3", "薯條", 80),
        ("m4", "奶昔", 120), ("m5", "洋蔥圈", 90), ("m6", "招牌沙拉", 150),
    ],
    "日式料理 & 壽司": [
        ("m1", "綜合壽司拼盤", 320), ("m2", "鮭魚生魚片", 280), ("m3", "天婦羅烏龍麵", 220),
        ("m4", "照燒雞肉飯", 180), ("m5", "味噌湯", 60), ("m6", "日式煎餃", 120),
    ],
    "義式料理 & 披薩": [
        ("m1", "瑪格麗特披薩", 280), ("m2", "培根蛋奶義大利麵", 240), ("m3", "凱薩沙拉", 160),
        ("m4", "蒜香麵包", 80), ("m5", "提拉米蘇", 120), ("m6", "義式濃縮咖啡", 60),
    ],
    "墨西哥料理 & 塔可": [
        ("m1", "牛肉塔可", 120), ("m2", "雞肉捲餅", 160), ("m3", "酪梨醬", 80),
        ("m4", "墨西哥玉米片", 100), ("m5", "莎莎醬", 60), ("m6", "墨西哥汽水", 50),
    ],
}


def fallback_menu(restaurant_name: str, category: str = "") -> list[MenuItem]:
    """Pick a menu whose category's first word appears in the restaurant name or category."""
    haystack = f"{restaurant_name} {category}"
    chosen = next(
        (cat for cat in FALLBACK_MENUS if cat.split(" ")[0] in haystack),
        DEFAULT_MENU_CATEGORY,
    )
    return [
        MenuItem(id=item_id, name=name, price=price, restaurant_name=restaurant_name)
        for item_id, name, price in FALLBACK_MENUS[chosen]
    ]
