"""
공유 상수
"""
