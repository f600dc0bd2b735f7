"""Tool loop demo: a scripted model asks for a tool, then answers with its result."""

import asyncio
import logging

from pydantic import BaseModel

from shuttle import GenerateResponse, Message, Shuttle, TextPart, ToolRequest, ToolRequestPart
from shuttle.models.testing import define_programmable_model


class WeatherParams(BaseModel):
    city: str


async def weather(params: WeatherParams) -> str:
    data = {"Beijing": "sunny, 25°C", "Shanghai": "cloudy, 22°C"}
    return data.get(params.city, f"{params.city}: no data")


async def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    ai = Shuttle(model="scripted")
    ai.define_tool("weather", "Look up the weather for a city", weather, input_schema=WeatherParams)
    model = define_programmable_model(ai, "scripted")

    async def handle(request, on_chunk):
        last = request.messages[-1]
        if last.role == "tool":
            answer = last.content[0].tool_response.output
            return GenerateResponse(message=Message(role="model", content=[TextPart(f"It is {answer}.")]))
        return GenerateResponse(
            message=Message(
                role="model",
                content=[ToolRequestPart(ToolRequest(name="weather", input={"city": "Beijing"}, ref="w1"))],
            )
        )

    model.handle_response = handle
    response = await ai.generate("What's the weather in Beijing?", tools=["weather"])
    print(response.text)
    print(f"turns sent to model: {len(model.requests)}")


if __name__ == "__main__":
    asyncio.run(main())
