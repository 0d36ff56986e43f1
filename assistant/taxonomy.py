"""
Keyword taxonomy.

Static tables that drive intent routing, goal and format extraction, FAQ
matching and B2B detection. Keywords may be written with diacritics; they
are normalized at comparison time (see assistant.text.contains_any).
Most entries are stems so that Slovak inflections still match
("kav" covers kava / kavu / kavy).
"""

# =============================================================================
# Intents
# =============================================================================

ORDER_HELP = "order_help"
PRODUCT_SEARCH = "product_search"
BENEFIT_GOAL = "benefit_goal"
GENERAL = "general"

INTENTS = (ORDER_HELP, PRODUCT_SEARCH, BENEFIT_GOAL, GENERAL)

ORDER_HELP_KEYWORDS = [
    "doprav", "poštovn", "doručen", "dobierk", "platb", "zaplat", "platiť",
    "vráten", "vrátiť", "reklamáci", "objednávk", "kedy príde", "sledovan",
    "zásielk", "kuriér", "shipping", "delivery", "payment", "refund",
    "return", "order status", "tracking",
]

PRODUCT_SEARCH_KEYWORDS = [
    "káv", "coffee", "čaj", "kapsul", "produkt", "odporuč", "poraď",
    "hľadám", "kúpiť", "kúpim", "ponuk", "zrnk", "mlet", "instant",
    "bez kofeínu", "decaf", "huby", "hubov", "mushroom", "doplnk",
    "doplnok", "latte", "matcha", "kakao",
]

# =============================================================================
# Goals (checked in this order, first hit wins)
# =============================================================================

GOAL_KEYWORDS: dict[str, list[str]] = {
    "sleep": ["spánok", "spánk", "spať", "nespavos", "zaspáv", "sleep", "insomn"],
    "stress": ["stres", "nervóz", "úzkos", "upokoj", "relax", "anxiety"],
    "energy": ["energi", "únav", "unaven", "povzbud", "nakopn", "energy", "fatigue"],
    "focus": ["sústred", "koncentr", "fokus", "focus", "pamäť", "mozog", "brain"],
    "immunity": ["imunit", "immun", "odolnos", "prechlad", "chríp"],
    "keto": ["keto", "low carb", "nízkosacharid"],
    "protein": ["protein", "proteín", "bielkovin", "svaly", "svalov"],
    "testosterone": ["testosterón", "testosteron", "libid", "potenci"],
    "cbd": ["cbd", "konop", "hemp"],
}

GOAL_LABELS: dict[str, str] = {
    "sleep": "lepší spánok",
    "stress": "menej stresu",
    "energy": "viac energie",
    "focus": "lepšie sústredenie",
    "immunity": "silnejšiu imunitu",
    "keto": "keto stravovanie",
    "protein": "viac bielkovín",
    "testosterone": "podporu testosterónu",
    "cbd": "relax s CBD",
}

# =============================================================================
# Preferred formats (checked in this order, first hit wins)
# =============================================================================

CAFFEINE_FREE = "caffeine_free"
WHOLE_BEAN = "whole_bean"
GROUND = "ground"
INSTANT = "instant"

FORMAT_KEYWORDS: dict[str, list[str]] = {
    CAFFEINE_FREE: ["bez kofeínu", "bezkofeín", "decaf", "caffeine free", "caffeine-free"],
    WHOLE_BEAN: ["zrnk", "v zrnách", "whole bean", "beans"],
    GROUND: ["mlet", "pomlet", "ground"],
    INSTANT: ["instant", "rozpust"],
}

FORMAT_LABELS: dict[str, str] = {
    CAFFEINE_FREE: "kávu bez kofeínu",
    WHOLE_BEAN: "zrnkovú kávu",
    GROUND: "mletú kávu",
    INSTANT: "instantnú kávu",
}

# =============================================================================
# FAQ questions (checked in this order)
# =============================================================================

FAQ_FREE_SHIPPING_KEYWORDS = [
    "doprava zadarmo", "dopravu zadarmo", "poštovné zadarmo", "poštovného zadarmo",
    "bezplatn", "free shipping", "od akej sumy", "od koľko",
]
FAQ_COD_KEYWORDS = ["dobierk", "cash on delivery"]
FAQ_SHIPPING_KEYWORDS = ["doprav", "poštovn", "doručen", "zásielk", "kuriér", "shipping", "delivery"]
FAQ_PAYMENT_KEYWORDS = ["platb", "zaplat", "platiť", "kartou", "prevodom", "payment"]
FAQ_RETURNS_KEYWORDS = ["vráten", "vrátiť", "reklamáci", "odstúp", "refund", "return"]

# =============================================================================
# B2B
# =============================================================================

B2B_KEYWORDS = [
    "veľkoobchod", "wholesale", "distribúci", "distribut", "distribution",
    "private label", "privátna značka", "vlastná značka", "white label",
    "reseller", "veľkoodber", "odber vo veľkom", "minimálne množstvo",
    "minimum order", "faktúr", "invoice", "spoluprác",
]
B2B_TOKENS = ["ičo", "dič", "vat", "dph", "moq", "b2b"]

B2B_TYPE_PRIVATE_LABEL = "Private label"
B2B_TYPE_WHOLESALE = "Veľkoobchod / predajca"
B2B_TYPE_DISTRIBUTION = "Distribúcia"

B2B_TYPE_KEYWORDS: list[tuple[str, list[str]]] = [
    (B2B_TYPE_PRIVATE_LABEL, ["private label", "privát", "vlastn", "white label", "značk"]),
    (B2B_TYPE_DISTRIBUTION, ["distribu"]),
    (B2B_TYPE_WHOLESALE, ["veľkoobchod", "wholesale", "reseller", "predaj", "obchod", "e-shop", "eshop"]),
]
