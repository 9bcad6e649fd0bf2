"""Built-in email templates, keyed by notification kind.

Each template is a (subject, html, text) triple of Jinja2 strings.
"""

from deliverybase.domain.entities import NotificationKind

EMAIL_TEMPLATES: dict[NotificationKind, tuple[str, str, str]] = {
    NotificationKind.CONFIRMATION: (
        "{{ app_name }} - Confirm your account",
        """<p>Hello {{ name }},</p>
<p>Your {{ app_name }} account is almost ready. Confirm it by entering this code:</p>
<p><strong>{{ token }}</strong></p>
<p>or by following <a href="{{ app_url }}/confirm-account">this link</a>.</p>
<p>The code expires in {{ expire_minutes }} minutes.</p>
<p>If you did not create this account, you can ignore this message.</p>""",
        """Hello {{ name }},

Your {{ app_name }} account is almost ready. Confirm it with this code: {{ token }}
or at {{ app_url }}/confirm-account

The code expires in {{ expire_minutes }} minutes.

If you did not create this account, you can ignore this message.""",
    ),
    NotificationKind.PASSWORD_RESET: (
        "{{ app_name }} - Reset your password",
        """<p>Hello {{ name }},</p>
<p>You asked to reset your password. Enter this code:</p>
<p><strong>{{ token }}</strong></p>
<p>at <a href="{{ app_url }}/new-password">{{ app_url }}/new-password</a>.</p>
<p>The code expires in {{ expire_minutes }} minutes.</p>
<p>If you did not request a password reset, you can ignore this message.</p>""",
        """Hello {{ name }},

You asked to reset your password. Enter this code: {{ token }}
at {{ app_url }}/new-password

The code expires in {{ expire_minutes }} minutes.

If you did not request a password reset, you can ignore this message.""",
    ),
    NotificationKind.ORDER_DELIVERED: (
        "{{ app_name }} - Your order has been delivered",
        """<p>Hello {{ name }},</p>
<p>Your order of {{ quantity }} units for the address {{ address }} has been delivered.</p>
<p>Thank you for ordering with {{ app_name }}.</p>""",
        """Hello {{ name }},

Your order of {{ quantity }} units for the address {{ address }} has been delivered.

Thank you for ordering with {{ app_name }}.""",
    ),
}
