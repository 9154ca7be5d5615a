"""프런트 데스크 택배 보관 서비스 패키지.

Front-desk parcel tracking service package.
Tracks parcels received on behalf of hotel guests from check-in to pickup.
"""
