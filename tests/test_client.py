import httpx

from campusvoice.client import CampusVoiceClient
from campusvoice.views import DashboardView, EditDialog, submission_view, tracking_view


def test_report_and_track_flow_check(client, complaint_payload):
    api = CampusVoiceClient(http=client)

    submitted = submission_view(*api.submit_complaint(**complaint_payload))
    assert submitted.succeeded

    view = tracking_view(*api.track(submitted.tracking_code.lower()))
    assert view.kind == "found"
    assert view.status_label == "Pending Review"
    assert view.location_label == "Science Block"

    assert tracking_view(*api.track("CV-DOESNOTEXIST")).kind == "not_found"


def test_admin_dashboard_flow_check(admin_client, complaint_payload):
    api = CampusVoiceClient(http=admin_client)
    api.submit_complaint(**complaint_payload)

    status_code, user = api.me()
    dashboard = DashboardView(user=user if status_code == 200 else None)
    assert dashboard.is_authenticated

    dashboard.apply_list_response(*api.list_complaints(dashboard.query_params()))
    dashboard.apply_stats_response(*api.stats())
    assert len(dashboard.complaints) == 1
    assert dashboard.stats["pending"] == 1

    dialog = EditDialog()
    dialog.open(dashboard.complaints[0])
    dialog.status = "in-progress"
    status_code, body = api.update_complaint(dialog.complaint["id"], dialog.patch_body())
    assert (status_code, body) == (200, {"success": True})

    dashboard.status_filter = "in-progress"
    dashboard.apply_list_response(*api.list_complaints(dashboard.query_params()))
    dashboard.apply_stats_response(*api.stats())
    assert [c["status"] for c in dashboard.complaints] == ["in-progress"]
    assert dashboard.stats["inProgress"] == 1


def test_unauthenticated_dashboard_check(client):
    api = CampusVoiceClient(http=client)

    status_code, _ = api.me()

    assert status_code == 401
    dashboard = DashboardView()
    dashboard.apply_list_response(*api.list_complaints())
    assert dashboard.complaints == []


def test_transport_failure_is_reported_as_status_zero_check():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    api = CampusVoiceClient("http://campusvoice.test", transport=httpx.MockTransport(handler))

    assert api.track("CV-ABC") == (0, None)
    assert tracking_view(*api.track("CV-ABC")).kind == "error"


def test_base_url_and_transport_check():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, json={"redirectUrl": "https://accounts.google.com/o/oauth2"})

    api = CampusVoiceClient("http://campusvoice.test", transport=httpx.MockTransport(handler))

    assert api.oauth_redirect_url() == (200, {"redirectUrl": "https://accounts.google.com/o/oauth2"})
    assert seen == ["http://campusvoice.test/api/oauth/google/redirect_url"]
