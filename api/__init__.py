"""
API 層

- sessions：session 建立、查詢、重設、結束
- rounds：回合查詢、開新回合、提交猜測
"""
