BRAND_DISPLAY_NAMES = {
    "apple": "Apple", "samsung": "Samsung", "huawei": "Huawei", "xiaomi": "Xiaomi",
    "oppo": "OPPO", "vivo": "vivo", "oneplus": "OnePlus", "google": "Google",
    "sony": "Sony", "motorola": "Motorola", "nokia": "Nokia", "realme": "realme",
    "lenovo": "Lenovo", "dell": "Dell", "asus": "ASUS", "acer": "Acer", "msi": "MSI",
    "microsoft": "Microsoft", "razer": "Razer", "logitech": "Logitech",
    "canon": "Canon", "nikon": "Nikon", "fujifilm": "Fujifilm", "gopro": "GoPro",
    "bose": "Bose", "jbl": "JBL", "sennheiser": "Sennheiser", "beats": "Beats",
    "nintendo": "Nintendo", "playstation": "PlayStation", "xbox": "Xbox",
    "philips": "Philips", "panasonic": "Panasonic", "toshiba": "Toshiba",
    "dyson": "Dyson", "shark": "Shark", "irobot": "iRobot", "roomba": "Roomba",
    "bosch": "Bosch", "siemens": "Siemens", "whirlpool": "Whirlpool",
    "nike": "Nike", "adidas": "Adidas", "puma": "Puma", "reebok": "Reebok",
    "new balance": "New Balance", "under armour": "Under Armour",
    "zara": "Zara", "lg": "LG", "hp": "HP",
}
