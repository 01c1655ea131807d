RESTAURANTS_PROMPT = """
請為一個美食外送 App 生成一個包含8家多樣化且吸引人的虛構餐廳列表。
請以繁體中文提供詳細資訊，例如：唯一的 ID、名稱、類別、評分(介於3.5到5.0之間)、評論數、外送時間預估、最低訂單金額，
以及一個來自 picsum.photos 的佔位圖片 URL（例如：https://picsum.photos/500/300）。

RULES:
1. Return ONLY valid JSON. Do not write explanations.
2. Format: {{"restaurants": [{{"id": "1", "name": "...", "category": "...", "rating": 4.5, "reviews": 120, "deliveryTime": "25-35 分鐘", "minOrder": 150, "image": "https://picsum.photos/500/300?random=1"}}]}}
"""

MENU_PROMPT = """
請為名為 "{restaurant_name}" 的餐廳生成一份包含6個品項的真實菜單。
對於每個品項，請提供唯一的 ID、名稱和價格。每個品項都應包含餐廳名稱以供參考。請使用繁體中文回答。

RULES:
1. Return ONLY valid JSON. Do not write explanations.
2. Format: {{"menu": [{{"id": "m1", "name": "...", "price": 180, "restaurantName": "{restaurant_name}"}}]}}
"""

ORDER_PROMPT = """
一位顧客下了一張美食外送訂單。
顧客資料: {details}。
訂單品項: {items}。
請根據這些資訊，生成一個唯一的訂單編號（格式：ORD-XXXXXX，X 為數字）和一個真實的預計送達時間（例如：25-35 分鐘）。

RULES:
1. Return ONLY valid JSON. Do not write explanations.
2. Format: {{"orderNumber": "ORD-123456", "estimatedDeliveryTime": "25-35 分鐘"}}
"""
