#!/usr/bin/env python3
"""
Smoke test for a running contact relay
Run this after starting the server with: uvicorn contact_relay.main:app --reload

Sends a real email through Resend when RESEND_API_KEY is configured on the server.
"""

import argparse

import requests


def test_contact_api(base_url: str):
    """Exercise the contact endpoint: preflight, a rejected submission, then a real one"""

    url = f"{base_url}/api/v1/contact/"

    try:
        # 1. Preflight
        response = requests.options(url)
        cors_origin = response.headers.get("Access-Control-Allow-Origin")
        if response.status_code == 200 and cors_origin == "*":
            print("✅ Preflight OK")
        else:
            print(f"❌ Preflight failed: {response.status_code} (Allow-Origin: {cors_origin})")

        # 2. Invalid email must be rejected
        response = requests.post(url, json={"name": "Smoke", "email": "not-an-email", "message": "test"})
        if response.status_code == 400:
            print(f"✅ Invalid email rejected: {response.json()}")
        else:
            print(f"❌ Expected 400 for invalid email, got {response.status_code}: {response.text}")

        # 3. Valid submission
        test_data = {
            "name": "John Doe",
            "email": "john.doe@example.com",
            "message": "Hello!\nI'm interested in learning more about your services.",
        }
        response = requests.post(url, json=test_data)
        if response.status_code == 200:
            print(f"✅ Submission relayed: {response.json()}")
        else:
            print(f"❌ Submission failed with status code: {response.status_code}")
            print(f"Response: {response.text}")

    except requests.exceptions.ConnectionError:
        print("❌ Could not connect to the API server.")
        print("Make sure the server is running with: uvicorn contact_relay.main:app --reload")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Smoke test the contact relay API")
    parser.add_argument("--base-url", default="http://localhost:8000")
    args = parser.parse_args()

    print("🧪 Testing Contact API...")
    print("=" * 50)
    test_contact_api(args.base_url)
