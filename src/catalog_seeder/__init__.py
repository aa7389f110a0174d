"""
목적: catalog_seeder 패키지 루트를 정의한다.
설명: 카탈로그 시딩 작업이 공유하는 인프라(shared)와 외부 연동(integrations)을 묶는다.
디자인 패턴: 패키지 루트
참조: src/catalog_seeder/shared, src/catalog_seeder/integrations
"""

__version__ = "0.1.0"
