"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
Repositories issue statements against the store and never commit;
the caller owns the transaction boundary.
"""
