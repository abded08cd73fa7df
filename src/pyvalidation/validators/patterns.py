"""
Regular expressions used by the locale validators.

Kept free of imports so both the validators and the cache warm-up can use
them.
"""

from __future__ import annotations

PROVINCES = "京津沪渝冀豫云辽黑湘皖鲁新苏浙赣鄂桂甘晋蒙陕吉闽贵粤青藏川宁琼"

CN_NAME = r"^[a-zA-Z0-9\u4e00-\u9fa5·]{1,10}$"
MOBILE = r"^(13|14|15|16|17|18|19)[0-9]{9}$"
ZIP_CODE = r"^[0-9]{6}$"
ID_NUMBER_15 = r"^[0-9]{15}$"
ID_NUMBER_18 = r"^[0-9]{17}[0-9Xx]$"

# 7 characters: province, city letter, 5 serial characters
PLATE_NUMBER = rf"^[{PROVINCES}使领][A-Z][A-HJ-NP-Z0-9]{{4}}[A-HJ-NP-Z0-9挂学警港澳]$"
# 8 characters: new-energy plates, D/F marks electric or hybrid
PLATE_NUMBER_NEW_ENERGY = (
    rf"^[{PROVINCES}使领][A-Z](?:[0-9]{{5}}[DF]|[DF][A-HJ-NP-Z0-9][0-9]{{4}})$"
)
PLATE_PROVINCE_PREFIX = rf"^[{PROVINCES}]"

# Precompiled by CacheManager.warmup()
WARMUP_PATTERNS: tuple[str, ...] = (
    CN_NAME,
    MOBILE,
    ZIP_CODE,
    PLATE_PROVINCE_PREFIX,
    PLATE_NUMBER,
    PLATE_NUMBER_NEW_ENERGY,
    ID_NUMBER_15,
    ID_NUMBER_18,
)
