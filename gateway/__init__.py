"""Gateway - 운동 추천 API 프록시

사용 빈도: 매 요청
업스트림: 추천(예측) API

주요 기능:
- Origin 허용 목록 기반 CORS
- 업스트림 추천 경로 자동 탐색 (후보 경로 순차 시도)
- 운동 기록 임시 저장 (메모리)
"""

__version__ = "1.0.0"
