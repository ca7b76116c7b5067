# backend/salescrm/filters/__init__.py

"""
複合フィルタ（AND/OR ツリー）関連モジュール群。

主な責務:
- フィルタツリーのスキーマ定義
- ネスト深さのチェック
- Notion フィルタ JSON への変換
- フラット化済みの行に対するローカル評価
"""
