from datetime import datetime

import pytest
import pytz

from report_engine.core.config import Settings


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def generated_at():
    return datetime(2024, 1, 15, 10, 30, tzinfo=pytz.UTC)


@pytest.fixture
def sample_data():
    """One collection per shipped report, shaped like upstream analytics output."""
    return {
        "stats": {
            "total_users": 120,
            "active_users": 95,
            "total_modules": 14,
            "active_modules": 10,
            "total_assignments": 480,
            "completed_assignments": 300,
            "in_progress_assignments": 120,
            "compliance_rate": 62.456,
            "avg_exam_score": 78.125,
        },
        "engagement_score": 79.17,
        "learner_progress": [
            {"id": 1, "name": "Ana", "department": "Sales", "modules_enrolled": 4, "modules_completed": 4,
             "avg_module_score": 88.333, "nip": "198001", "last_active": "2024-01-14 16:45:00"},
            {"id": 2, "name": "Budi", "department": None, "modules_enrolled": 3, "modules_completed": 1,
             "avg_module_score": 52},
        ],
        "module_stats": [
            {"id": 10, "title": "Fire Safety", "total_enrolled": 40, "completed": 30, "in_progress": 6, "pending": 4,
             "category": "Safety", "avg_score": 78.456, "pass_count": 28, "avg_duration": 44.5, "avg_rating": 4.36},
        ],
        "learner_exam_performance": [
            {"id": 1, "name": "Ana", "total_attempts": 3, "avg_score": 85.456, "highest_score": 95,
             "lowest_score": 70},
        ],
        "department_leaderboard": [
            {"name": "Sales", "total_users": 30, "completed_modules": 80, "completion_rate": 91.2,
             "engagement_score": 77.777},
            {"department": "HR", "total_users": 12, "total_completed": 20, "completion_rate": 55},
        ],
        "certificate_stats": {
            "total_issued": 50,
            "by_program": [
                {"name": "Fire Safety", "count": 30, "active": 25, "expired": 4, "revoked": 1},
                {"name": "First Aid", "count": 20, "active": 20},
            ],
        },
        "at_risk_users": [
            {"id": 5, "name": "Citra", "email": "citra@example.com", "department": "Ops", "days_inactive": 75,
             "account_age": 400},
            {"id": 6, "name": "Dewi", "email": "dewi@example.com", "department": "Ops", "days_inactive": 45,
             "account_age": 90},
        ],
        "pre_post_analysis": [
            {"id": 10, "name": "Fire Safety", "avg_pretest": 50, "avg_posttest": 65},
        ],
        "exam_performance": [
            {"id": 100, "title": "Final Exam", "total_taken": 20, "pass_count": 17, "avg_score": 81,
             "avg_duration": 42.6, "question_count": 25, "reliability_index": 0.82, "discrimination": 0.35,
             "passmark": 75},
        ],
        "quiz_difficulty": [
            {"id": 100, "total_attempts": 24, "difficulty_level": None, "discrimination_index": 0.4},
            {"id": 200, "title": "Quiz 1", "total_attempts": 10, "pass_count": 3, "avg_score": 45,
             "discrimination_index": 0.1, "reliability_index": 0.5},
        ],
        "trend_data": [
            {"date": "2024-01-14", "day_of_week": 0, "active_users": 12, "modules_started": 4,
             "modules_completed": 2, "avg_time_spent": 33.333, "peak_hour": 20},
            {"date": "2024-01-15", "day_of_week": 1, "active_users": 40, "modules_started": 10,
             "modules_completed": 7, "avg_time_spent": 41, "peak_hour": 9},
        ],
        "performance_heatmap": [
            {"day_of_week": 0, "avg_engagement": 80.04},
            {"day_of_week": 1, "avg_engagement": 62.5},
            {"day_of_week": 3, "avg_engagement": 20},
        ],
        "transcripts": [
            {"nip": "198001", "name": "Ana", "department": "Sales", "module_name": "Fire Safety",
             "category": "Safety", "status": "completed", "exam_score": 92, "progress_percentage": 100,
             "duration_minutes": 125, "enrolled_at": "2024-01-01", "completed_at": "2024-01-11",
             "certificate_number": "CERT-001", "certificate_status": "active"},
            {"nip": "198002", "name": "Budi", "status": "in_progress", "progress_percentage": 40,
             "duration_minutes": 30, "enrolled_at": "2024-01-05", "completed_at": "2024-01-07"},
        ],
        "compliance": [
            {"id": 1, "name": "Ana", "nip": "198001", "email": "ana@example.com", "department": "Sales",
             "status": "active", "role": "user", "total_trainings": 5, "completed_trainings": 4,
             "created_at": "2023-06-01T08:00:00"},
            {"id": 2, "name": "Budi", "status": "inactive", "total_trainings": 4, "completed_trainings": 1},
        ],
        "program_enrollment": [
            {"module_id": 10, "total_enrolled": 42, "completed_count": 33},
            {"module_id": 99, "total_enrolled": 5},
        ],
        "certificates": [
            {"id": 1, "learner_id": "198001", "learner_name": "Ana", "department": "Sales",
             "program_title": "Fire Safety", "certificate_number": "CERT-001", "issued_date": "2024-01-11",
             "expiry_date": "2025-01-11", "issued_by": "HR"},
            {"id": 2, "learner_id": "198002", "learner_name": "Budi", "program_title": "First Aid",
             "certificate_number": "CERT-002", "issued_date": "2022-03-01", "expiry_date": "2023-03-01"},
        ],
        "compliance_audit": [
            {"id": 70, "certificate_id": 1, "compliance_status": "Compliant", "document_valid": 1},
            {"id": 71, "certificate_id": 2, "document_valid": 0, "audit_notes": None},
        ],
        "certificate_distribution": [
            {"id": 90, "certificate_id": 1, "distribution_status": "issued"},
        ],
        "users_by_department": [
            {"category": "Department", "status": "Sales", "count": 30, "percentage": 71.4286},
            {"category": "Role", "status": "admin", "count": 2},
        ],
    }
