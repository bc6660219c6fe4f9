"""Outbound copy (Spanish). Sanitized at send time, not here."""
from screener.core.state_machine import INTRO, Q1, Q2, Q3, Q4, Q5, Q6

QUESTION_TEXT = {
    INTRO: (
        "👋 ¡Hola! Gracias por postularte como *Profesor/a de Español* en nuestro equipo 🇪🇸✨\n\n"
        "🕒 Este es un *pre-filtro rápido (2 minutos)* para confirmar algunos requisitos básicos.\n\n"
        "✅ Responde con el *número* de la opción (por ejemplo: *1*) o con la palabra clave.\n\n"
        "¿List@? Responde:\n1) Empezar 🚀\n2) Salir ❌"
    ),
    Q1: (
        "*Q1/6* 🧩\nBuscamos personas para un rol de *equipo* (no estilo marketplace).\n\n"
        "¿Buscas un rol fijo y comprometido con el equipo?\n"
        "1) ✅ Sí, quiero ser parte del equipo\n2) ❌ No, solo freelance / marketplace"
    ),
    Q2: (
        "*Q2/6* 🗓️\n¿Cuántas horas por semana puedes comprometerte de forma constante?\n"
        "1) 💪 Tiempo completo (30+ hrs/sem)\n2) 🙂 Medio tiempo (15–29 hrs/sem)\n3) 🥲 Menos de 15 hrs/sem\n\n"
        "También puedes escribir: FT / PT / LOW"
    ),
    Q3: (
        "*Q3/6* ⏱️\n¿Cuándo podrías empezar?\n"
        "1) 🚀 Inmediatamente\n2) 📆 En 1–2 semanas\n3) 🗓️ En 1 mes o más\n\n"
        "También puedes escribir: NOW / 2WEEKS / 1MONTH"
    ),
    Q4: "*Q4/6* 💻🎧\n¿Tienes internet estable y un lugar tranquilo para enseñar?\n1) ✅ Sí\n2) ❌ No",
    Q5: "*Q5/6* 📚✨\n¿Estás de acuerdo en seguir el currículum y los SOPs del equipo?\n1) ✅ Sí, claro\n2) ❌ No",
    Q6: (
        "*Q6/6* 🇺🇸🗣️\nPara coordinarnos en el equipo necesitamos un nivel mínimo de inglés.\n\n"
        "¿Cuál es tu nivel de inglés?\n"
        "1) ✅ Bueno (puedo conversar con confianza)\n2) 🙂 Me defiendo (lo básico)\n3) ❌ No sé mucho"
    ),
}

FAIL_MESSAGES = {
    Q1: (
        "💛 Gracias por tu sinceridad.\nEn este momento buscamos *miembros de equipo* con compromiso "
        "y disponibilidad constante.\n\n🙏 Te deseamos lo mejor."
    ),
    Q2: (
        "💛 ¡Gracias!\nPor ahora necesitamos más *horas por semana* de disponibilidad constante.\n\n"
        "🙏 Te agradecemos tu tiempo y tu interés."
    ),
    Q4: (
        "💛 Gracias por tu respuesta.\nPara dar clases con calidad necesitamos *internet estable* "
        "y un *espacio tranquilo*.\n\n🙏 Te agradecemos tu tiempo."
    ),
    Q5: (
        "💛 Gracias por tu sinceridad.\nPara este rol es importante seguir nuestro sistema y procesos.\n\n"
        "🙏 Te deseamos lo mejor."
    ),
    Q6: (
        "💛 ¡Gracias!\nPor ahora necesitamos al menos un nivel básico de inglés "
        "(aunque sea “me defiendo”).\n\n🙏 Te agradecemos tu tiempo."
    ),
}

PASS_MESSAGE = (
    "🎉 *¡Excelente! Has pasado el pre-filtro* ✅\n\n"
    "🧑‍💼 Siguiente paso: hablar con una persona del equipo para coordinar tu *primera entrevista*.\n\n"
    "👉 Escríbenos aquí para continuar:\n{link}\n\n"
    "💬 _Envía este mensaje cuando escribas:_\n"
    "“Hola, pasé el pre-filtro. Mi nombre es ___ y mi correo es ___.”\n\n"
    "💛 ¡Gracias y nos vemos pronto!"
)

INVALID_INPUT_MESSAGE = (
    "😊 ¡Casi!\nResponde con el *número* de una opción (por ejemplo: *1*) o con la palabra clave.\n\n"
    "✨ Si quieres reiniciar, escribe: *RESTART*\n🚀 Para empezar desde cero, escribe: *START*"
)

NO_SESSION_MESSAGE = "👋 ¡Hola! Para comenzar el pre-filtro, por favor escribe *START* 🚀"

EXIT_MESSAGE = "Entendido. Si quieres empezar más tarde, simplemente escribe *START*."

RATE_LIMITED_MESSAGE = "Estás enviando mensajes demasiado rápido. Por favor, espera un momento."

GENERIC_ERROR_MESSAGE = "Lo sentimos, algo salió mal. Por favor, escribe *RESTART* para empezar de nuevo."


def reprompt_for(step: str) -> str:
    """Invalid-input notice followed by the step's own question."""
    question = QUESTION_TEXT.get(step)
    if not question:
        return INVALID_INPUT_MESSAGE
    return f"{INVALID_INPUT_MESSAGE}\n\n{question}"


def pass_message(link: str) -> str:
    return PASS_MESSAGE.format(link=link)


def fail_message(fail_key: str) -> str:
    return FAIL_MESSAGES.get(fail_key, FAIL_MESSAGES[Q1])
