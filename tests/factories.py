from use_cases.session_models import PlannerProfile, UserSession


def make_user(role="client", planner_status="approved", user_id=7):
    return UserSession(
        user_id=user_id,
        first_name="Maria",
        last_name="Santos",
        email=f"{role}@example.com",
        role=role,
        planner_profile=PlannerProfile(business_name="Dream Day", status=planner_status) if role == "planner" else None,
    )
