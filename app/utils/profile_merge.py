# app/utils/profile_merge.py
from datetime import datetime, timezone
from typing import Dict, Any

# 逐欄位淺層合併的群組：只覆寫有傳入的 key，其餘保留
SHALLOW_MERGE_GROUPS = ("personal_info", "professional_info", "stats")
# 整批覆蓋的群組：直接以傳入的 list 取代
REPLACE_GROUPS = ("skills", "projects")


def merge_profile_update(current: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    """
    將部分更新 (update) 套用到目前的 Profile 資料 (current)，回傳新的 dict。

    - personal_info / professional_info / stats: 淺層合併
    - skills / projects: 整批覆蓋 (不做元素合併、不去重)
    - 未傳入 (或為 None) 的群組維持不變

    不會修改傳入的 dict；同一份 update 套用兩次與套用一次結果相同。
    """
    merged = dict(current)

    for group in SHALLOW_MERGE_GROUPS:
        changes = update.get(group)
        if changes is None:
            continue
        merged[group] = {**(current.get(group) or {}), **changes}

    for group in REPLACE_GROUPS:
        items = update.get(group)
        if items is None:
            continue
        merged[group] = [dict(item) for item in items]

    return merged


def build_attachment(name: str, size: int, content_type: str, url: str, uploaded_at: datetime | None = None) -> Dict[str, Any]:
    """建立新的附件紀錄 (整筆取代舊紀錄，不做合併)"""
    if not url:
        raise ValueError("attachment url must not be empty")
    return {
        "name": name,
        "size": size,
        "type": content_type,
        "url": url,
        "uploaded_at": (uploaded_at or datetime.now(timezone.utc)).isoformat(),
    }
