"""
목적: DB 엔진 패키지를 정의한다.
설명: 엔진별 하위 모듈(mongodb)을 묶는다.
디자인 패턴: 패키지 루트
참조: src/catalog_seeder/integrations/db/engines/mongodb
"""
