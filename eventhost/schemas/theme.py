from pydantic import BaseModel


class ThemeColors(BaseModel):
    primary: str
    secondary: str
    background: str
    text: str
    accent: str


class ThemeFonts(BaseModel):
    heading: str
    body: str


class ThemeStyles(BaseModel):
    borderRadius: str
    boxShadow: str
    buttonStyle: str


class Theme(BaseModel):
    id: str
    name: str
    description: str
    colors: ThemeColors
    fonts: ThemeFonts
    styles: ThemeStyles
