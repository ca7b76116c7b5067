# backend/salescrm/sales/__init__.py

"""
セールス一覧（/api/sales）モジュール群。

主な責務:
- UI からのソート・複合フィルタ要求を受け付ける
- フィルタを検証・変換して Notion に問い合わせる
- 結果をフラットな行として返す
"""
