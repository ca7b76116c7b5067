# backend/salescrm/notion/__init__.py

"""
Notion 連携用モジュール群。

主な責務:
- Notion API からデータソースを query する
- ページオブジェクトを表示用のフラットな行に変換する
"""
