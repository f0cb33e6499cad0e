"""
설정 모듈
"""
