"""배포된 Gateway 점검 스크립트

사용법:
    python scripts/check_deployment.py <GATEWAY_URL> [--origin ORIGIN]

예시:
    python scripts/check_deployment.py https://your-gateway.up.railway.app --origin https://yukfit.netlify.app
"""

import argparse
import json
import sys
from typing import Any, Dict, Optional

import requests


SAMPLE_WORKOUT = {
    "age": 26,
    "gender": "female",
    "height": 165,
    "weight": 55,
    "bmi": 20.2,
    "source": "check_deployment",
}


def _call(method: str, url: str, payload: Optional[Dict[str, Any]] = None, **kwargs) -> Dict[str, Any]:
    try:
        response = requests.request(method, url, json=payload, **kwargs)
    except requests.RequestException as e:
        return {"status_code": None, "success": False, "response": None, "headers": {}, "error": str(e)}

    try:
        body = response.json()
    except ValueError:
        body = response.text

    return {
        "status_code": response.status_code,
        "success": response.ok,
        "response": body,
        "headers": dict(response.headers),
        "error": None,
    }


def check_health(base_url: str) -> Dict[str, Any]:
    """헬스 체크"""
    return _call("GET", f"{base_url}/api/health", timeout=5)


def check_preflight(base_url: str, origin: str) -> Dict[str, Any]:
    """CORS preflight (허용된 Origin이면 Access-Control-Allow-Origin 포함)"""
    result = _call(
        "OPTIONS",
        f"{base_url}/api/recommend",
        headers={"Origin": origin, "Access-Control-Request-Method": "POST"},
        timeout=5,
    )
    result["success"] = (
        result["status_code"] == 204
        and result["headers"].get("Access-Control-Allow-Origin") == origin
    )
    return result


def check_recommend(base_url: str) -> Dict[str, Any]:
    """추천 프록시"""
    payload = {k: v for k, v in SAMPLE_WORKOUT.items() if k != "source"}
    result = _call("POST", f"{base_url}/api/recommend", payload, timeout=60)
    result["payload"] = payload
    return result


def check_save(base_url: str) -> Dict[str, Any]:
    """운동 기록 저장 (이미 저장된 경우 409도 정상으로 간주)"""
    result = _call("POST", f"{base_url}/api/save", SAMPLE_WORKOUT, timeout=10)
    result["success"] = result["status_code"] in (201, 409)
    result["payload"] = SAMPLE_WORKOUT
    return result


def check_saved_workouts(base_url: str) -> Dict[str, Any]:
    """저장된 기록 목록"""
    return _call("GET", f"{base_url}/api/saved-workouts", timeout=10)


def main():
    parser = argparse.ArgumentParser(description="배포된 Gateway 점검")
    parser.add_argument("base_url", help="Gateway URL")
    parser.add_argument("--origin", default="https://yukfit.netlify.app", help="CORS 점검용 Origin")
    args = parser.parse_args()

    base_url = args.base_url.rstrip("/")

    print("=" * 70)
    print("Gateway 배포 점검")
    print("=" * 70)
    print(f"\n대상 URL: {base_url}\n")

    health = check_health(base_url)
    print("1. 헬스 체크")
    print("-" * 70)
    print(json.dumps({k: v for k, v in health.items() if k != "headers"}, indent=2, ensure_ascii=False))

    if not health["success"]:
        print("\n⚠️  헬스 체크 실패. URL을 확인하세요.")
        sys.exit(1)

    checks = [
        ("CORS preflight", check_preflight(base_url, args.origin)),
        ("추천 프록시", check_recommend(base_url)),
        ("기록 저장", check_save(base_url)),
        ("기록 목록", check_saved_workouts(base_url)),
    ]

    for idx, (name, result) in enumerate(checks, start=2):
        print(f"\n\n{idx}. {name}")
        print("-" * 70)
        print(json.dumps({k: v for k, v in result.items() if k != "headers"}, indent=2, ensure_ascii=False))

    print("\n\n" + "=" * 70)
    print("점검 요약")
    print("=" * 70)
    print(f"헬스 체크:        {'✅ 성공' if health['success'] else '❌ 실패'}")
    for name, result in checks:
        print(f"{name + ':':<18}{'✅ 성공' if result['success'] else '❌ 실패'}")

    if not all(result["success"] for _, result in checks):
        sys.exit(1)


if __name__ == "__main__":
    main()
