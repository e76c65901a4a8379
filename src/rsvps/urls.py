SUBMIT_RSVP_URL = "/api/rsvp"
INVITE_LANDING_URL = "/i/{code}"
HOME_PAGE_URL = "/"
