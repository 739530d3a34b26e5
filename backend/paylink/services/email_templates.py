"""
Jinja2 sources for the two notification e-mails.

HTML templates are rendered with autoescaping on, so every interpolated
value is escaped. Text templates are rendered with autoescaping off and must
not contain markup.
"""

BASE_STYLE = """
    body { font-family: 'Arial', sans-serif; line-height: 1.6; color: #333333; margin: 0; padding: 0; background-color: #f9f9f9; }
    .container { max-width: 600px; margin: 0 auto; padding: 20px; }
    .header { background-color: #0063F7; padding: 30px 20px; text-align: center; border-radius: 16px 16px 0 0; }
    .header h1 { color: #ffffff; margin: 0; font-size: 28px; }
    .header p { color: rgba(255, 255, 255, 0.9); margin: 5px 0 0; font-size: 16px; }
    .content { background-color: #ffffff; padding: 30px; border-radius: 0 0 16px 16px; box-shadow: 0 4px 20px rgba(0, 0, 0, 0.1); }
    .title { color: #0063F7; text-align: center; font-size: 24px; margin-bottom: 25px; }
    .divider { border-top: 1px solid #eeeeee; margin: 25px 0; }
    .footer { text-align: center; color: #999999; font-size: 12px; margin-top: 30px; }
    .highlight-box { background-color: #f5f9ff; border-left: 4px solid #0063F7; padding: 15px; margin: 20px 0; border-radius: 0 8px 8px 0; }
    .data-table { width: 100%; border-collapse: collapse; margin: 20px 0; }
    .data-table th { background-color: #0063F7; color: white; padding: 10px; text-align: left; }
    .data-table td { padding: 10px; border-bottom: 1px solid #eeeeee; }
"""

CUSTOMER_HTML = """<!DOCTYPE html>
<html>
<head>
    <meta name="x-apple-disable-message-reformatting">
    <meta http-equiv="Content-Type" content="text/html; charset=UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Pagamento em Processamento - {{ brand }}</title>
    <style>{{ style|safe }}</style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>{{ brand }}</h1>
            <p>Pagamento via link</p>
        </div>
        <div class="content">
            <h2 class="title">Pagamento em Processamento</h2>
            <p>Olá, {{ name }}!</p>
            <p>Recebemos seu pagamento e ele está sendo processado pela nossa equipe. Você receberá uma confirmação assim que o processo for concluído.</p>
            <div class="highlight-box">
                <strong>Detalhes do pagamento:</strong>
                <p>ID da transação: {{ link_id }}</p>
                <p>Data: {{ timestamp }}</p>
            </div>
            <div class="divider"></div>
            <p>Caso tenha alguma dúvida, entre em contato conosco respondendo este e-mail ou através dos nossos canais de atendimento.</p>
            <p>Atenciosamente,<br>
            <strong>Equipe {{ brand }}</strong></p>
            <div class="footer">
                <p>© {{ year }} {{ brand }}. Todos os direitos reservados.</p>
            </div>
        </div>
    </div>
</body>
</html>
"""

CUSTOMER_TEXT = """Olá, {{ name }}!

Recebemos seu pagamento e ele está sendo processado pela nossa equipe.

ID da transação: {{ link_id }}
Data: {{ timestamp }}

Atenciosamente,
Equipe {{ brand }}
"""

REVIEWER_HTML = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Novo Pagamento Recebido - {{ brand }}</title>
    <style>{{ style|safe }}</style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>{{ brand }}</h1>
            <p>Pagamento via link</p>
        </div>
        <div class="content">
            <h2 class="title">Novo Pagamento Recebido</h2>
            <p>Um novo pagamento foi submetido através do sistema de links. Seguem os detalhes:</p>
            <table class="data-table">
                <tr>
                    <th colspan="2">Dados do Cliente</th>
                </tr>
                {% for label, value in rows %}
                <tr>
                    <td><strong>{{ label }}:</strong></td>
                    <td>{{ value }}</td>
                </tr>
                {% endfor %}
            </table>
            <div class="divider"></div>
            <p><strong>Documentos anexados:</strong></p>
            {% for filename in attachment_names %}
            <p>{{ loop.index }}. {{ filename }}</p>
            {% endfor %}
            <div class="footer">
                <p>© {{ year }} {{ brand }}. Todos os direitos reservados.</p>
            </div>
        </div>
    </div>
</body>
</html>
"""

REVIEWER_TEXT = """Novo pagamento recebido.

{% for label, value in rows %}{{ label }}: {{ value }}
{% endfor %}
Documentos anexados:
{% for filename in attachment_names %}{{ loop.index }}. {{ filename }}
{% endfor %}"""

HTML_TEMPLATES = {
    "customer.html": CUSTOMER_HTML,
    "reviewer.html": REVIEWER_HTML,
}

TEXT_TEMPLATES = {
    "customer.txt": CUSTOMER_TEXT,
    "reviewer.txt": REVIEWER_TEXT,
}

