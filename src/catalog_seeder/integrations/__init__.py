"""
목적: 외부 연동 패키지를 정의한다.
설명: LLM 공급자와 MongoDB 연동 모듈을 묶는다.
디자인 패턴: 패키지 루트
참조: src/catalog_seeder/integrations/llm, src/catalog_seeder/integrations/db
"""
