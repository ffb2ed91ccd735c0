"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services apply the per-resource rule tables, existence and uniqueness checks,
then call repositories for the actual reads and writes.
"""
