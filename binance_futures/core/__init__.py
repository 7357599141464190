"""
공통 모듈

상수, enum 타입, 예외, 로깅, 설정
"""
