#!/usr/bin/env python3
"""
Kazi Quickstart — employer posts a job, employee applies.

Signs up an employer and an employee → posts a job → lists jobs →
applies → employer reads the applications → closes the job.
Run with: python examples/quickstart.py

Requires: pip install httpx
Backend must be running: kazi serve (http://localhost:8000)
"""

import sys
import uuid

import httpx

BASE = "http://localhost:8000/api"


def random_phone() -> str:
    return f"07{uuid.uuid4().int % 10**8:08d}"


def signup(client: httpx.Client, role: str, **extra) -> dict:
    resp = client.post("/auth/signup", json={
        "name": f"Demo {role.title()}",
        "phone": random_phone(),
        "location": "Nairobi",
        "password": "demo-password-123",
        "role": role,
        **extra,
    })
    assert resp.status_code == 201, f"Signup failed: {resp.text}"
    return resp.json()


def main():
    client = httpx.Client(base_url=BASE, timeout=10)

    # ── Health check ──────────────────────────────────────────────
    print("Checking backend health...")
    try:
        resp = client.get("/health")
    except httpx.ConnectError:
        print(f"Backend not reachable at {BASE}")
        sys.exit(1)
    health = resp.json()
    print(f"  Database: {'✓' if health['database'] == 'ok' else '✗'}")

    # ── Accounts ──────────────────────────────────────────────────
    print("\n1. Signing up an employer and an employee...")
    employer = signup(client, "employer", jobType="Construction")
    employee = signup(client, "employee", specialization="Masonry")
    employer_auth = {"Authorization": f"Bearer {employer['token']}"}
    print(f"   Employer: {employer['user']['name']} ({employer['user']['id'][:8]}...)")
    print(f"   Employee: {employee['user']['name']} ({employee['user']['id'][:8]}...)")

    # ── Post a job ────────────────────────────────────────────────
    print("\n2. Posting a job...")
    resp = client.post("/jobs", headers=employer_auth, json={
        "title": "Mason needed",
        "description": "Two weeks of block work in Kasarani",
        "location": "Nairobi",
        "phone": employer["user"]["phone"],
        "category": "construction",
    })
    assert resp.status_code == 201, f"Failed: {resp.text}"
    job = resp.json()["job"]
    print(f"   Job: {job['title']} ({job['id'][:8]}...)")

    # ── Browse ────────────────────────────────────────────────────
    jobs = client.get("/jobs").json()["jobs"]
    print(f"\n3. {len(jobs)} active job(s) listed")

    # ── Apply ─────────────────────────────────────────────────────
    print("\n4. Employee applies...")
    resp = client.post("/applications", json={
        "jobId": job["id"],
        "employeeId": employee["user"]["id"],
        "employeeName": employee["user"]["name"],
        "employeePhone": employee["user"]["phone"],
    })
    assert resp.status_code == 201, f"Failed: {resp.text}"
    print(f"   Application: {resp.json()['application']['status']}")

    applications = client.get(f"/applications/job/{job['id']}").json()["applications"]
    print(f"   Employer sees {len(applications)} application(s)")

    # ── Close the job ─────────────────────────────────────────────
    print("\n5. Closing the job...")
    resp = client.put(f"/jobs/{job['id']}", headers=employer_auth, json={"status": "closed"})
    assert resp.status_code == 200, f"Failed: {resp.text}"
    print(f"   Status: {resp.json()['job']['status']}")

    print("\nDone.")


if __name__ == "__main__":
    main()
