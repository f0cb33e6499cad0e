"""
API 라우터
"""
