from dataclasses import dataclass


@dataclass
class PageTemplates:
    LAYOUT = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 900px; margin: 0 auto; padding: 20px;">
{body}
</body>
</html>
"""

    FLYER = """
<div style="text-align: center; margin-bottom: 30px;">
    <h1 style="color: #d4a373;">You're invited!</h1>
    <p>Please use the personal link from your invitation to answer.</p>
</div>
"""

    RSVP_FORM = """
<div style="text-align: center; margin-bottom: 30px;">
    <h1 style="color: #d4a373;">You're invited!</h1>
    <p>Let us know if you can make it.</p>
</div>
<form id="rsvp" data-code="{code}">
    <p><label>Name <input name="name" required minlength="2"></label></p>
    <p><label>Email <input name="email" type="email"></label></p>
    <p><label>Phone <input name="phone" type="tel"></label></p>
    <p>
        <label><input type="radio" name="attending" value="yes" checked> I'll be there</label>
        <label><input type="radio" name="attending" value="no"> I can't make it</label>
    </p>
    <p><label><input type="checkbox" name="adultPartner"> Coming with a partner</label></p>
    <p>
        Children 0-3 <input name="kids_0_3" type="number" min="0" value="0">
        4-10 <input name="kids_4_10" type="number" min="0" value="0">
        11-17 <input name="kids_11_17" type="number" min="0" value="0">
    </p>
    <p><label>Message <textarea name="message" maxlength="500"></textarea></label></p>
    <button type="submit">Send</button>
    <p id="result"></p>
</form>
<script>
document.getElementById("rsvp").addEventListener("submit", async (event) => {{
    event.preventDefault();
    const form = event.target;
    const data = new FormData(form);
    const attending = data.get("attending") === "yes";
    const body = {{
        code: form.dataset.code,
        name: data.get("name"),
        email: data.get("email"),
        phone: data.get("phone"),
        attending: attending,
        adultPartner: attending && data.get("adultPartner") === "on",
        children: {{ageRanges: {{
            "0-3": Number(data.get("kids_0_3")),
            "4-10": Number(data.get("kids_4_10")),
            "11-17": Number(data.get("kids_11_17")),
        }}}},
        message: data.get("message"),
    }};
    const res = await fetch("{submit_url}", {{
        method: "POST",
        headers: {{"Content-Type": "application/json"}},
        body: JSON.stringify(body),
    }});
    const json = await res.json();
    document.getElementById("result").textContent = json.message;
}});
</script>
"""

    LOGIN = """
<h1>Admin</h1>
<form id="login">
    <p><label>Username <input name="username" autocomplete="username"></label></p>
    <p><label>Password <input name="password" type="password" autocomplete="current-password"></label></p>
    <button type="submit">Log in</button>
    <p id="error" style="color: #bc6c25;"></p>
</form>
<script>
document.getElementById("login").addEventListener("submit", async (event) => {{
    event.preventDefault();
    const data = new FormData(event.target);
    const res = await fetch("{login_url}", {{
        method: "POST",
        headers: {{"Content-Type": "application/json"}},
        body: JSON.stringify({{username: data.get("username"), password: data.get("password")}}),
    }});
    if (res.ok) {{
        window.location.href = "{next_url}";
    }} else {{
        document.getElementById("error").textContent = "Login failed";
    }}
}});
</script>
"""

    DASHBOARD = """
<h1>RSVPs</h1>
<p>
    <a href="{dashboard_url}">All</a> |
    <a href="{dashboard_url}?attending=yes">YES</a> |
    <a href="{dashboard_url}?attending=no">NO</a>
</p>
<p><strong>{count}</strong> responses, <strong>{headcount}</strong> people attending.</p>
<table style="width: 100%; border-collapse: collapse;">
    <thead>
        <tr>
            <th align="left">Updated</th><th align="left">Name</th><th align="left">Contact</th>
            <th align="left">Attending</th><th align="left">Partner</th>
            <th align="left">Children</th><th align="left">Message</th>
        </tr>
    </thead>
    <tbody>
{rows}
    </tbody>
</table>
"""

    DASHBOARD_ROW = """        <tr>
            <td>{updated_at}</td><td>{name}</td><td>{contact}</td>
            <td>{attending}</td><td>{adult_partner}</td>
            <td>{children}</td><td>{message}</td>
        </tr>"""
