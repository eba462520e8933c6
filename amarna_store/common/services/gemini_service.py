import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from google import genai
from google.genai import types as genai_types

from ..models import Product, StoreSettings
from .logging import log_event

RECIPE_ERROR_MESSAGE = "فشل في توليد الوصفة. يرجى المحاولة مرة أخرى."
CHAT_FALLBACK_MESSAGE = "أعتذر، حدثت مشكلة تقنية بسيطة. ممكن تحاول مرة تانية؟ 🌴"
CHAT_GREETING = 'أهلاً بك في تمور العمارنة! 🌴 أنا "تمر حنه"، كيف أقدر أساعدك النهاردة؟'

DIFFICULTIES = ("easy", "medium", "hard")
CHAT_HISTORY_LIMIT = 10

CHEF_PERSONA = (
    "You are a professional gourmet chef specializing in Middle Eastern sweets and dates. "
    "You speak fluent, appetizing Arabic."
)

RECIPE_PROMPT_TEMPLATE = """
Create a creative dessert or snack recipe using "{date_type}" dates.
The difficulty level should be "{difficulty}".
The output must be in Arabic.
Be creative and highlight the flavor profile of this specific date.
"""

ASSISTANT_PROMPT_TEMPLATE = """
أنتِ "تمر حنه"، المساعدة الذكية الودودة لموقع "تمور العمارنة".

معلومات عن الشركة:
- الاسم: تمور العمارنة.
- الشعار: "تمرة تستاهل تدخل دارك".
- الوصف: شركة متخصصة في بيع أجود أنواع التمور العربية الفاخرة (محاصيل القصيم والمدينة).
- العنوان: المقطم - الهضبة الوسطى - القاهرة.
- الهاتف/واتساب: 01001933502 (يمكنك اقتراح التواصل عبر واتساب للطلبات الخاصة).

بيانات المنتجات والأسعار الحالية (بالجنيه المصري):
{products}

أسعار التوصيل الحالية:
{delivery_rates}

سياسة الخصم الحالية:
{discount_info}

قواعد الرد:
1. تحدثي باللهجة المصرية الودودة والمحترمة (أو العربية الفصحى البسيطة).
2. وظيفتك مساعدة الزوار في اختيار التمور، معرفة الأسعار، وتفاصيل التوصيل.
3. إذا سأل العميل عن كيفية الطلب، أخبريه أن يضيف المنتجات للسلة ويملأ بياناته.
4. كوني مختصرة ومفيدة.
5. استخدمي الإيموجيز المناسبة (🌴، ✨، ❤️) لإضفاء جو لطيف.
6. اعتمدي فقط على البيانات المزودة لكِ أعلاه.
"""

RECIPE_FIELDS = ("title", "description", "ingredients", "instructions", "prepTime")


def _recipe_schema() -> genai_types.Schema:
    string = genai_types.Type.STRING
    return genai_types.Schema(
        type=genai_types.Type.OBJECT,
        properties={
            "title": genai_types.Schema(type=string, description="The name of the recipe in Arabic"),
            "description": genai_types.Schema(type=string, description="A short, appetizing description in Arabic"),
            "ingredients": genai_types.Schema(
                type=genai_types.Type.ARRAY,
                items=genai_types.Schema(type=string),
                description="List of ingredients with quantities in Arabic",
            ),
            "instructions": genai_types.Schema(
                type=genai_types.Type.ARRAY,
                items=genai_types.Schema(type=string),
                description="Step by step instructions in Arabic",
            ),
            "prepTime": genai_types.Schema(type=string, description="Preparation time in Arabic (e.g., 15 دقيقة)"),
        },
        required=list(RECIPE_FIELDS),
    )


class GeminiService:
    """
    Gemini 文字生成整合：
    - 甜點食譜產生（固定 JSON schema，阿拉伯文輸出）
    - 「تمر حنه」客服聊天（帶入目前商品、運費與折扣資料）
    失敗時不丟出例外，而是回傳使用者可讀的阿拉伯文訊息。
    """

    def __init__(self, api_key: Optional[str], llm_model_name: str = "gemini-2.5-flash", client: Any = None) -> None:
        self.logger = logging.getLogger(__name__)
        self.api_key = api_key
        self.llm_model_name = llm_model_name
        self.client = client
        if self.client is None:
            self._init_client()

    def _init_client(self) -> None:
        if not self.api_key:
            self.logger.warning("GEMINI_API_KEY 未設定，AI 功能停用")
            self.client = None
            return
        try:
            self.client = genai.Client(api_key=self.api_key)
            self.logger.info("GeminiService 初始化完成，模型：%s", self.llm_model_name)
        except Exception as exc:  # pragma: no cover
            self.logger.exception("Gemini Client 初始化失敗：%s", exc)
            self.client = None

    # Public API -----------------------------------------------------------------

    def generate_recipe(self, date_type: str, difficulty: str) -> Dict[str, Any]:
        """回傳 {"status": "ok", "recipe": {...}} 或 {"status": "error", "message": ...}。"""

        if difficulty not in DIFFICULTIES:
            raise ValueError(f"difficulty must be one of {', '.join(DIFFICULTIES)}")
        if not date_type or not date_type.strip():
            raise ValueError("date_type required")
        if not self.client:
            return {"status": "error", "message": RECIPE_ERROR_MESSAGE}

        prompt = RECIPE_PROMPT_TEMPLATE.format(date_type=date_type.strip(), difficulty=difficulty)
        config = genai_types.GenerateContentConfig(
            system_instruction=CHEF_PERSONA,
            response_mime_type="application/json",
            response_schema=_recipe_schema(),
        )
        try:
            response = self.client.models.generate_content(
                model=self.llm_model_name,
                contents=prompt,
                config=config,
            )
            text = self._extract_text(response)
            if not text:
                raise ValueError("No response from AI")
            recipe = self._parse_recipe(text)
        except Exception as exc:
            self.logger.error("Gemini recipe error: %s: %s", type(exc).__name__, exc)
            log_event("error", "ai.recipe_failed", date_type=date_type, difficulty=difficulty)
            return {"status": "error", "message": RECIPE_ERROR_MESSAGE}
        log_event("info", "ai.recipe_generated", date_type=date_type, difficulty=difficulty)
        return {"status": "ok", "recipe": recipe}

    def chat(
        self,
        message: str,
        history: Sequence[Dict[str, str]],
        products: Sequence[Product],
        settings: StoreSettings,
    ) -> str:
        """Reply as the store assistant; ``history`` items are {"sender", "text"}."""

        if not self.client:
            return CHAT_FALLBACK_MESSAGE
        config = genai_types.GenerateContentConfig(
            system_instruction=self.build_system_prompt(products, settings),
        )
        try:
            chat = self.client.chats.create(
                model=self.llm_model_name,
                config=config,
                history=self.build_history(history),
            )
            response = chat.send_message(message)
            text = self._extract_text(response)
        except Exception as exc:
            self.logger.error("Gemini chat error: %s: %s", type(exc).__name__, exc)
            log_event("error", "ai.chat_failed")
            return CHAT_FALLBACK_MESSAGE
        return text or CHAT_FALLBACK_MESSAGE

    # Prompt helpers -------------------------------------------------------------

    @staticmethod
    def build_system_prompt(products: Sequence[Product], settings: StoreSettings) -> str:
        catalog = [{"name": p.name, "price": p.price, "desc": p.description} for p in products]
        discount = {"active": settings.is_discount_active, "percentage": settings.discount_percentage}
        return ASSISTANT_PROMPT_TEMPLATE.format(
            products=json.dumps(catalog, ensure_ascii=False),
            delivery_rates=json.dumps(settings.to_dict()["deliveryRates"], ensure_ascii=False),
            discount_info=json.dumps(discount, ensure_ascii=False),
        )

    @staticmethod
    def build_history(history: Sequence[Dict[str, str]]) -> List[genai_types.Content]:
        """Last turns only, mapped to Gemini roles (bot -> model)."""

        contents = []
        for turn in list(history)[-CHAT_HISTORY_LIMIT:]:
            role = "user" if turn.get("sender") == "user" else "model"
            contents.append(
                genai_types.Content(role=role, parts=[genai_types.Part.from_text(text=str(turn.get("text", "")))])
            )
        return contents

    @staticmethod
    def _parse_recipe(text: str) -> Dict[str, Any]:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("recipe must be a JSON object")
        missing = [f for f in RECIPE_FIELDS if f not in data]
        if missing:
            raise ValueError(f"recipe fields missing: {', '.join(missing)}")
        return {
            "title": str(data["title"]),
            "description": str(data["description"]),
            "ingredients": [str(x) for x in data["ingredients"]],
            "instructions": [str(x) for x in data["instructions"]],
            "prepTime": str(data["prepTime"]),
        }

    @staticmethod
    def _extract_text(response: Any) -> Optional[str]:
        """嘗試從 SDK 回應擷取文字內容。"""
        text = getattr(response, "text", None)
        if isinstance(text, str) and text.strip():
            return text.strip()
        candidates = getattr(response, "candidates", None) or []
        texts = []
        for c in candidates:
            content = getattr(c, "content", None)
            if not content:
                continue
            for p in getattr(content, "parts", None) or []:
                txt = getattr(p, "text", None)
                if isinstance(txt, str) and txt.strip():
                    texts.append(txt.strip())
        return "\n".join(texts) if texts else None
