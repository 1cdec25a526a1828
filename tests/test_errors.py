from quakeinsight.errors import BadRequest, QuakeInsightError, SmsError


def test_status_code_defaults_per_class():
    assert QuakeInsightError("boom").status_code == 500
    assert BadRequest("bad").status_code == 400
    assert SmsError("sms down").status_code == 500


def test_status_code_override():
    error = SmsError("Route not available", status_code=503)
    assert error.status_code == 503
    assert error.message == "Route not available"
    assert str(error) == "Route not available"
    assert SmsError("again").status_code == 500
