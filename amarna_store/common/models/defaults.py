"""Built-in catalog used when nothing has been saved yet."""

from typing import List

from .product import Product
from .store_settings import StoreSettings


def default_products() -> List[Product]:
    return [
        Product(
            id=1,
            name="تمر عجوة المدينة الفاخرة",
            description="عجوة المدينة الفاخرة السوداء المباركة، تتميز ببنيتها العصرية وطعمها المتوازن، غنية بالفوائد الصحية.",
            price="185 ج.م / كجم",
            image="/images/product-1.png",
            category="luxury",
        ),
        Product(
            id=2,
            name="تمر سكري مفتل ملكي",
            description="سكري مفتل ملكي بلونه وقوامه الذهبي الهش المكرمل. حلاوة طبيعية تذوب في الفم.",
            price="145 ج.م / كجم",
            image="/images/product-2.png",
            category="luxury",
        ),
        Product(
            id=3,
            name="تمر مجدول جامبو",
            description="ملك التمور بحجمه الكبير ومذاقه الغني. قوام لحمي ناعم ومذاق يشبه الكراميل، مثالي للضيافة الفاخرة.",
            price="135 ج.م / كجم",
            image="/images/product-3.png",
            category="luxury",
        ),
        Product(
            id=4,
            name="تمر سكري محشو كاجو",
            description="تمر سكري فاخر محشو كاجو، غني بالفوائد والفيتامينات ومضادات الأكسدة، منشط طبيعي.",
            price="565 ج.م / كجم",
            image="/images/product-4.png",
            category="stuffed",
        ),
        Product(
            id=5,
            name="تمر سكري محشو لوز",
            description="تمر سكري فاخر محشو اللوز، غني بالفيتامينات ومضادات الأكسدة، ومولد للطاقة.",
            price="565 ج.م / كجم",
            image="/images/product-5.png",
            category="stuffed",
        ),
        Product(
            id=6,
            name="تمر سكري ملكي محشو بندق",
            description="تمر سكري ملكي محشو بندق ومغلف بالشوكولاتة البيضاء، غني بالفيتامينات ومضادات الأكسدة، ومولد للطاقة ومنشط طبيعي.",
            price="665 ج.م / كجم",
            image="/images/product-6.png",
            category="stuffed",
        ),
    ]


def default_settings() -> StoreSettings:
    return StoreSettings()
