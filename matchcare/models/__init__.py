"""
데이터 모델
"""
